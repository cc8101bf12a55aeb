"""Check that attribute templates name real Faker providers."""

from faker import Faker

from ..factory.attributes import TYPE_PROVIDERS
from ..schema.models import TrellisSchema
from .base import ValidationResult


def check_fake_providers(schema: TrellisSchema, faker: Faker | None = None) -> ValidationResult:
    """Warn about attributes whose ``fake`` provider Faker does not offer.

    Attributes with a default never reach Faker and are skipped.

    Args:
        schema: The parsed schema.
        faker: The Faker instance to check against.

    Returns:
        ValidationResult with warnings for unknown providers.
    """
    result = ValidationResult()
    faker = faker or Faker()

    for entity_name, entity in schema.entities.items():
        for attr in entity.attributes:
            if attr.default is not None:
                continue
            if attr.fake:
                if not callable(getattr(faker, attr.fake, None)):
                    result.add_warning(
                        code="UNKNOWN_FAKE_PROVIDER",
                        message=f"Attribute '{attr.name}' uses unknown fake provider '{attr.fake}'",
                        entity=entity_name,
                        attribute=attr.name,
                        provider=attr.fake,
                    )
            elif not attr.optional and attr.type not in TYPE_PROVIDERS:
                result.add_warning(
                    code="UNGENERATED_ATTRIBUTE",
                    message=f"Attribute '{attr.name}' of type '{attr.type}' has no default or fake provider",
                    entity=entity_name,
                    attribute=attr.name,
                )

    return result
