from typing import Any, Optional

import pydantic
from pydantic.alias_generators import to_camel
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .dto import PasswordRulesDTO
from .exc import SpecificationSyntaxError
from .parser import parse_spec
from .rules import RuleSet


class Settings(BaseSettings):
    """
    Password policy settings.

    The policy is given either as a rule specification string (``rules``) or as
    named fields (``policy``), never both.
    """

    model_config = SettingsConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        env_prefix="PASSWORD_RULES_",
        env_nested_delimiter="__",
    )

    rules: str = ""
    policy: Optional[PasswordRulesDTO] = None

    @pydantic.field_validator("rules")
    @classmethod
    def valid_spec(cls, value: str) -> str:
        try:
            parse_spec(value)
        except SpecificationSyntaxError as ex:
            raise ValueError(str(ex)) from ex
        return value

    @pydantic.model_validator(mode="before")
    @classmethod
    def mutually_exclusive(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("rules") and data.get("policy"):
            raise ValueError("input must include either 'rules' or 'policy', not both")
        return data

    def rule_set(self) -> RuleSet:
        if self.policy is not None:
            return RuleSet.from_fields(self.policy)
        return RuleSet.from_spec(self.rules)

    @classmethod
    def settings_customise_sources(
        cls,
        _: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, file_secret_settings, init_settings
