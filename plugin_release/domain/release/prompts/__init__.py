from plugin_release.domain.release.prompts.generation import (
    CHANGELOG_GENERATOR_HUMAN,
    CHANGELOG_GENERATOR_SYSTEM,
)

__all__ = [
    "CHANGELOG_GENERATOR_SYSTEM",
    "CHANGELOG_GENERATOR_HUMAN",
]
