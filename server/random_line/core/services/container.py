from __future__ import annotations

from dataclasses import dataclass

from ..config.settings import Settings
from ..contracts.sampling import SamplerOptions
from ..logging.service import LoggingService
from .sampling.pool import SamplerPool


@dataclass
class ServiceContainer:
    settings: Settings
    logging: LoggingService
    pool: SamplerPool

    @classmethod
    def from_settings(cls: type[ServiceContainer], settings: Settings) -> ServiceContainer:
        return cls(
            settings=settings,
            logging=LoggingService.create(),
            pool=SamplerPool(sampler_options(settings)),
        )


def sampler_options(settings: Settings) -> SamplerOptions:
    cfg = settings.sampler
    return SamplerOptions(
        algorithm=cfg.algorithm,
        seed=cfg.seed,
        encoding=cfg.encoding,
        errors=cfg.errors,
    )
