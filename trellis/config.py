"""Factory configuration."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FactoryConfig(BaseSettings):
    """Settings shared by every builder created from a factory.

    Unset fields are read from ``TRELLIS_*`` environment variables
    (``TRELLIS_SEED``, ``TRELLIS_LOCALE``, ``TRELLIS_BRANCH_POLICY``,
    ``TRELLIS_KEY_NAME``). Values passed to the constructor win.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRELLIS_",
        env_ignore_empty=True,
        extra="ignore",
    )

    seed: int | None = None
    locale: str = "en_US"
    branch_policy: Literal["latest", "all"] = "latest"
    key_name: str = Field(default="id", min_length=1)
