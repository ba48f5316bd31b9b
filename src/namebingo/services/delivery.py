"""Delivery modes — where a rendered card goes.

One-shot modes render a single card and write it out:

- :class:`FileDelivery` writes to a file
- :class:`StdoutDelivery` writes to standard output (or a given stream)

Service mode, :class:`HttpDelivery`, serves ``GET /`` and renders a new card
for every request until the server is stopped.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any, TextIO

from namebingo.domain.errors import ConfigurationError
from namebingo.services.telemetry import trace_span

if TYPE_CHECKING:
    from namebingo.services.card import CardGenerator

logger = logging.getLogger(__name__)


class DeliveryMode(StrEnum):
    FILE = "file"
    STDOUT = "stdout"
    HTTP = "http"


@dataclass(frozen=True)
class FileDelivery:
    path: Path
    mode: DeliveryMode = DeliveryMode.FILE


@dataclass(frozen=True)
class StdoutDelivery:
    stream: TextIO | None = None
    mode: DeliveryMode = DeliveryMode.STDOUT


@dataclass(frozen=True)
class HttpDelivery:
    host: str = "127.0.0.1"
    port: int = 8000
    mode: DeliveryMode = DeliveryMode.HTTP


Delivery = FileDelivery | StdoutDelivery | HttpDelivery


def _render(generator: CardGenerator) -> str:
    with trace_span("layout") as span:
        grid = generator.layout()
        if span is not None:
            span.annotate("cells", len(grid))
    with trace_span("render"):
        return generator.render(grid)


def deliver(generator: CardGenerator, target: Delivery) -> dict[str, Any]:
    """Run *generator* through *target* and describe what happened.

    Blocks until the server exits for :class:`HttpDelivery`.

    Raises:
        ConfigurationError: The output file cannot be written.
    """
    if not isinstance(target, FileDelivery | StdoutDelivery | HttpDelivery):
        raise TypeError(f"Unsupported delivery target: {target!r}")

    data: dict[str, Any] = {
        "mode": target.mode.value,
        "width": generator.spec.width,
        "height": generator.spec.height,
        "names": len(generator.names),
    }

    if isinstance(target, FileDelivery):
        document = _render(generator)
        try:
            target.path.parent.mkdir(parents=True, exist_ok=True)
            target.path.write_text(document, encoding="utf-8")
        except OSError as exc:
            msg = f"Cannot write card to {target.path}: {exc}"
            raise ConfigurationError(msg, path=target.path) from exc
        logger.debug("Wrote card to %s", target.path)
        data["output"] = str(target.path)
        data["bytes"] = len(document.encode("utf-8"))

    elif isinstance(target, StdoutDelivery):
        document = _render(generator)
        stream = target.stream if target.stream is not None else sys.stdout
        stream.write(document)
        stream.flush()
        data["bytes"] = len(document.encode("utf-8"))

    else:
        import uvicorn

        from namebingo.web.app import create_app

        # Fail before binding if the templates are broken.
        _render(generator)
        logger.info("Serving cards on http://%s:%d/", target.host, target.port)
        uvicorn.run(create_app(generator), host=target.host, port=target.port, log_config=None)
        data["url"] = f"http://{target.host}:{target.port}/"

    return data
