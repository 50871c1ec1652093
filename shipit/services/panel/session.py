"""
Panel session.

Handles the panel message protocol for one project, independent of how the
messages travel. `serve_json_lines` is the stdin/stdout transport used by
`shipit panel`.
"""

from __future__ import annotations

import asyncio
import json
import sys
from collections.abc import Callable
from typing import IO, Any

from ...core.interfaces.logger import ILogger
from ...core.interfaces.secrets import ISecretStore
from ...core.models.deploy import DeployRequest
from ..deploy.orchestrator import DeployOrchestrator
from . import messages
from .messages import PanelMessage

PostMessage = Callable[[dict[str, Any]], None]


class DeployPanel:
    """
    Message handler behind the deploy panel.

    Every inbound message is answered through `post`. Exceptions raised
    while handling a message are logged and posted as an error message;
    the session keeps running.
    """

    def __init__(
        self,
        project_root: str,
        post: PostMessage,
        orchestrator: DeployOrchestrator | None = None,
        secrets: ISecretStore | None = None,
        secret_key: str | None = None,
        logger: ILogger | None = None,
    ) -> None:
        self.project_root = project_root
        self._post = post
        self.orchestrator = orchestrator or DeployOrchestrator()
        self._secrets = secrets
        self._secret_key = secret_key
        self._logger = logger

    @property
    def secrets(self) -> ISecretStore:
        if self._secrets is None:
            self._secrets = self.orchestrator.secrets
        return self._secrets

    @property
    def secret_key(self) -> str:
        if self._secret_key is None:
            self._secret_key = self.orchestrator.settings.vercel.secret_key
        return self._secret_key

    @property
    def logger(self) -> ILogger:
        if self._logger is None:
            self._logger = self.orchestrator.logger
        return self._logger

    def post(self, message: PanelMessage) -> None:
        self._post(message.to_json())

    def log(self, text: str) -> None:
        self.post(messages.Log(text=str(text)))

    async def open(self) -> None:
        """Post the initial working-tree status."""
        await self._guarded(self._send_status)

    async def handle(self, raw: str | bytes | dict) -> None:
        """Handle one inbound message, posting any failure as an error."""

        async def dispatch() -> None:
            message = messages.parse_message(raw)
            self.logger.debug("Panel message: %s", message.type)
            await self._handlers[message.type](self, message)

        await self._guarded(dispatch)

    async def _guarded(self, action: Callable[[], Any]) -> None:
        try:
            await action()
        except Exception as e:
            self.logger.error("Panel message failed: %s", e)
            self.post(messages.Error(text=str(e)))

    async def _send_status(self) -> None:
        files = await self.orchestrator.status(self.project_root, self.log)
        self.post(messages.Status(files=files))

    async def _on_request_status(self, message: messages.RequestStatus) -> None:
        await self._send_status()

    async def _on_save_token(self, message: messages.SaveToken) -> None:
        if not message.token:
            self.logger.debug("Ignoring saveToken without a token")
            return
        self.secrets.store(self.secret_key, message.token)
        self.post(messages.TokenSaved())
        self.log("Token saved securely.")

    async def _on_clear_token(self, message: messages.ClearToken) -> None:
        self.secrets.delete(self.secret_key)
        self.post(messages.TokenCleared())
        self.log("Token removed.")

    async def _on_preview(self, message: messages.Preview) -> None:
        file = message.file or ""
        text = await self.orchestrator.preview(self.project_root, file, self.log)
        self.post(messages.PreviewResult(file=file, text=text))

    async def _on_deploy(self, message: messages.Deploy) -> None:
        request = DeployRequest(
            targets=frozenset(message.targets),
            files=message.files,
            token=message.token,
        )
        report = await self.orchestrator.deploy(request, self.project_root, self.log)
        self.post(messages.DeployResult(report=report))
        self.post(messages.Status(files=report.files))

    _handlers: dict[str, Callable[..., Any]] = {
        "requestStatus": _on_request_status,
        "saveToken": _on_save_token,
        "clearToken": _on_clear_token,
        "preview": _on_preview,
        "deploy": _on_deploy,
    }


def json_lines_writer(stream: IO[str]) -> PostMessage:
    """Create a `post` callable writing one JSON object per line to stream."""

    def post(message: dict[str, Any]) -> None:
        stream.write(json.dumps(message) + "\n")
        stream.flush()

    return post


async def serve_json_lines(panel: DeployPanel, stdin: IO[str] | None = None) -> None:
    """
    Serve a panel session over JSON lines until stdin closes.

    Each message is handled in its own task, so status and preview requests
    are answered while a deploy runs.
    """
    stdin = stdin or sys.stdin
    loop = asyncio.get_running_loop()
    pending: set[asyncio.Task] = set()

    await panel.open()
    while True:
        line = await loop.run_in_executor(None, stdin.readline)
        if not line:
            break
        if not line.strip():
            continue
        task = asyncio.ensure_future(panel.handle(line))
        pending.add(task)
        task.add_done_callback(pending.discard)

    if pending:
        await asyncio.gather(*pending)
