"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, spamctl.toml only contains
overrides.  A fresh setup needs no config file at all.
"""

from __future__ import annotations

import os

from pydantic import BaseModel, Field, field_validator

from spamctl.domain.factory import DEFAULT_MAX_EXPRESSION_LENGTH
from spamctl.domain.filters import DEFAULT_FIELD
from spamctl.domain.naming import DEFAULT_PREFIX

DEFAULT_SOURCES: tuple[str, ...] = (
    "https://raw.githubusercontent.com/ddofborg/analytics-ghost-spam-list/master/adwordsrobot.com-spam-list.txt",
    "https://raw.githubusercontent.com/Stevie-Ray/apache-nginx-referral-spam-blacklist/master/generator/domains.txt",
    "https://raw.githubusercontent.com/piwik/referrer-spam-blacklist/master/spammers.txt",
)


class FiltersConfig(BaseModel):
    """[filters] section."""

    model_config = {"frozen": True}

    name_prefix: str = DEFAULT_PREFIX
    max_expression_length: int = Field(default=DEFAULT_MAX_EXPRESSION_LENGTH, gt=1)
    field: str = DEFAULT_FIELD
    sharded: bool = True

    @field_validator("name_prefix")
    @classmethod
    def _prefix_not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "name_prefix cannot be empty"
            raise ValueError(msg)
        return value


class DomainsConfig(BaseModel):
    """[domains] section."""

    model_config = {"frozen": True}

    sources: list[str] = Field(default_factory=lambda: list(DEFAULT_SOURCES))
    snapshot_path: str = ".spamctl/domains.txt"
    private_path: str = ".spamctl/private-domains.txt"
    line_terminator: str = os.linesep
    timeout: float = Field(default=30.0, gt=0)


class ProviderConfig(BaseModel):
    """[provider] section."""

    model_config = {"frozen": True}

    path: str = ".spamctl/filters.json"


class SpamConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    filters: FiltersConfig = Field(default_factory=FiltersConfig)
    domains: DomainsConfig = Field(default_factory=DomainsConfig)
    provider: ProviderConfig = Field(default_factory=ProviderConfig)
