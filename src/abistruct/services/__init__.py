"""Services for abistruct tooling."""

from abistruct.services.build_service import BuildResult, CatalogueBuildService

__all__ = [
    "BuildResult",
    "CatalogueBuildService",
]
