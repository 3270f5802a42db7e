"""Model runtime: fetches the model file and talks to the server that serves it."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import httpx
import openai
from openai import AsyncOpenAI

from slashterm.config.settings import Settings

if TYPE_CHECKING:
    from slashterm.cli.console.context import ProgressCallback, StreamCallback

logger = logging.getLogger(__name__)

MB = 1024 * 1024


class ModelRuntimeError(RuntimeError):
    """Base error for model runtime failures."""

    pass


class ModelNotDownloadedError(ModelRuntimeError):
    """Raised when loading before the model file is cached."""

    pass


class ModelNotLoadedError(ModelRuntimeError):
    """Raised when chatting before the model is loaded."""

    pass


class ModelRuntime:
    """
    The one model handle of a session.

    The model file is cached under ``settings.models_dir``. "Loading" opens
    an OpenAI-compatible client against the local server that serves the
    cached file (e.g. llama.cpp's ``llama-server``) and checks it answers.
    """

    CHUNK_SIZE = MB

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = settings
        self._transport = transport
        self._client: AsyncOpenAI | None = None

    @property
    def model_path(self) -> Path:
        return self.settings.models_dir / self.settings.model_filename

    @property
    def loaded(self) -> bool:
        return self._client is not None

    def is_downloaded(self) -> bool:
        return self.model_path.exists()

    async def download(self, on_progress: ProgressCallback | None = None) -> None:
        """
        Stream the model file into the cache, reporting progress in MB.

        Data goes to a ``.part`` file that is renamed when complete and
        removed if the download fails.
        """
        url = self.settings.model_url
        path = self.model_path
        part = path.with_name(path.name + ".part")
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"Downloading {url} to {path}")

        complete = False
        try:
            async with httpx.AsyncClient(
                transport=self._transport, follow_redirects=True, timeout=30.0
            ) as client:
                async with client.stream("GET", url) as response:
                    response.raise_for_status()
                    expected = int(self.settings.model_size_mb * MB)
                    total = int(response.headers.get("content-length", 0)) or expected
                    loaded = 0
                    with open(part, "wb") as f:
                        async for chunk in response.aiter_bytes(self.CHUNK_SIZE):
                            f.write(chunk)
                            loaded += len(chunk)
                            if on_progress is not None:
                                on_progress(loaded / MB, total / MB)
            complete = True
        except (httpx.HTTPError, OSError) as e:
            logger.error(f"Download failed: {e}")
            raise
        finally:
            # Cancellation and callback errors must not leave a partial file
            if not complete:
                part.unlink(missing_ok=True)

        part.replace(path)
        logger.info(f"Downloaded {loaded / MB:.1f}MB to {path}")

    async def load(self) -> None:
        """Open the client and make sure the server answers."""
        if not self.is_downloaded():
            raise ModelNotDownloadedError("no model downloaded, run /download first")
        if self._client is not None:
            return

        base_url = self.settings.server_base_url
        client = AsyncOpenAI(base_url=base_url, api_key=self.settings.server_api_key)
        try:
            await client.models.list()
        except openai.APIError as e:
            await client.close()
            raise ModelRuntimeError(f"cannot reach model server at {base_url}: {e}") from e

        self._client = client
        logger.info(f"Model {self.settings.model_filename} loaded via {base_url}")

    async def unload(self) -> None:
        if self._client is None:
            return
        client, self._client = self._client, None
        await client.close()
        logger.info("Model unloaded")

    async def chat(self, messages: list[dict[str, str]], on_stream: StreamCallback | None = None) -> str:
        """
        Stream a chat completion for the conversation.

        ``on_stream`` receives the cumulative text after every new piece.
        Returns the full reply.
        """
        if self._client is None:
            raise ModelNotLoadedError("model is not loaded, run /load first")

        logger.debug(f"Sending {len(messages)} messages to {self.settings.server_model}")
        stream = await self._client.chat.completions.create(
            model=self.settings.server_model,
            messages=messages,
            temperature=self.settings.temperature,
            stream=True,
        )

        text = ""
        async for chunk in stream:
            if not chunk.choices:
                continue
            piece = chunk.choices[0].delta.content
            if not piece:
                continue
            text += piece
            if on_stream is not None:
                on_stream(text)

        return text

    async def clear_cache(self) -> None:
        """Unload and delete every cached model file."""
        await self.unload()
        models_dir = self.settings.models_dir
        if not models_dir.exists():
            return
        for path in models_dir.iterdir():
            if path.is_file():
                path.unlink()
                logger.info(f"Removed cached model {path}")
