"""Card pipeline — names in, HTML out.

:class:`CardGenerator` holds everything a card needs (names, grid, text
options, templates) and runs a fresh shuffle + layout + render on every
call. Its state never changes after construction, so one generator can
serve concurrent HTTP requests without locking.

:class:`CardService` wraps the steps the CLI drives (loading names,
building and delivering a card) and reports through ``ServiceResult``.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from namebingo.config.models import DEFAULT_NAME
from namebingo.domain.errors import BingoError
from namebingo.domain.layout import check_fillable, layout, needs_padding
from namebingo.domain.types import GridSpec, LaidOutGrid
from namebingo.services.render import default_environment, render_card
from namebingo.services.result import ServiceResult
from namebingo.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from jinja2 import Environment

    from namebingo.config.settings import BingoSettings
    from namebingo.plugins.manager import PluginManager
    from namebingo.services.delivery import Delivery

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CardOptions:
    """Text options for a card.

    ``default_name=None`` disables padding: a grid larger than the name
    pool is then a configuration error.
    """

    center: str | None = None
    default_name: str | None = DEFAULT_NAME
    title: str | None = None
    description: str | None = None


class CardGenerator:
    """Immutable shuffle-layout-render pipeline over a fixed name pool."""

    def __init__(
        self,
        names: Sequence[str],
        spec: GridSpec,
        options: CardOptions | None = None,
        *,
        seed: int | None = None,
        env: Environment | None = None,
    ) -> None:
        self._names = tuple(names)
        self._spec = spec
        self._options = options or CardOptions()
        self._seed = seed
        self._env = env or default_environment()
        check_fillable(len(self._names), spec, self._options.default_name)

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    @property
    def spec(self) -> GridSpec:
        return self._spec

    @property
    def options(self) -> CardOptions:
        return self._options

    @property
    def padded(self) -> bool:
        """Whether cards from this generator contain default-name filler."""
        return needs_padding(len(self._names), self._spec)

    def _rng(self) -> random.Random | None:
        # A seeded generator gets a new Random per call: identical cards, no shared state.
        if self._seed is None:
            return None
        return random.Random(self._seed)

    def layout(self) -> LaidOutGrid:
        """Lay out a freshly shuffled grid."""
        return layout(
            self._names,
            self._spec,
            default_token=self._options.default_name,
            center=self._options.center,
            rng=self._rng(),
        )

    def render(self, grid: LaidOutGrid | None = None) -> str:
        """Render *grid*, or a freshly laid-out one when omitted."""
        if grid is None:
            grid = self.layout()
        return render_card(
            grid,
            self._spec,
            title=self._options.title,
            description=self._options.description,
            env=self._env,
        )


class CardService:
    """Operations behind the ``generate``, ``serve``, and ``sources`` commands."""

    def __init__(self, settings: BingoSettings, plugins: PluginManager) -> None:
        self._settings = settings
        self._plugins = plugins

    @traced
    def load_names(self, kind: str, locator: str) -> ServiceResult:
        """Resolve the *kind* source and read its names once."""
        source_options = self._settings.source.model_dump(exclude={"kind", "locator"})
        try:
            with trace_span("supply") as span:
                source = self._plugins.create_source(kind, locator, **source_options)
                names = source.supply()
                if span is not None:
                    span.annotate("names", len(names))
        except BingoError as exc:
            return ServiceResult.failure("load_names", exc)

        warnings: list[str] = []
        if not names:
            warnings.append(f"Name source {kind}:{locator} returned no names")
        logger.debug("Loaded %d names from %r", len(names), source)
        return ServiceResult(
            ok=True,
            op="load_names",
            data={"kind": kind, "locator": source.locator, "names": list(names)},
            warnings=warnings,
        )

    def build_generator(
        self,
        names: Sequence[str],
        spec: GridSpec,
        options: CardOptions,
    ) -> CardGenerator:
        """Build a generator using the project's template overrides and seed.

        Raises:
            ConfigurationError: The names cannot fill the grid without padding.
        """
        from namebingo.infrastructure.templates import build_template_environment

        env = build_template_environment("card", state_dir=self._settings.state_dir)
        return CardGenerator(names, spec, options, seed=self._settings.seed, env=env)

    @traced
    def generate(self, generator: CardGenerator, target: Delivery) -> ServiceResult:
        """Produce one card (or start serving them) through *target*."""
        from namebingo.services.delivery import deliver

        try:
            data = deliver(generator, target)
        except BingoError as exc:
            return ServiceResult.failure("generate", exc)

        warnings: list[str] = []
        if generator.padded:
            filler = generator.options.default_name
            warnings.append(
                f"{len(generator.names)} names for {generator.spec.cell_count} cells; "
                f"padded with {filler!r}"
            )
        return ServiceResult(ok=True, op="generate", data=data, warnings=warnings)

    def list_sources(self) -> ServiceResult:
        """Registered source kinds with their descriptions."""
        items = [
            {"kind": kind, "class": cls.__qualname__, "description": cls.description}
            for kind, cls in sorted(self._plugins.sources.items())
        ]
        return ServiceResult(ok=True, op="list_sources", data={"items": items})
