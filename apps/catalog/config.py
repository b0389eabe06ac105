from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

# Length of the FeatureGroup.group_id column
GROUP_ID_FIELD_LENGTH = 60


def split_setting(value) -> FrozenSet[str]:
    """Parse a comma-separated setting into a set of stripped, non-empty ids."""
    if not value:
        return frozenset()
    if isinstance(value, str):
        value = value.split(',')
    return frozenset(item.strip() for item in value if item and item.strip())


@dataclass(frozen=True)
class ReconciliationConfig:
    """Settings consumed by the reconciliation services."""
    feature_type_include: FrozenSet[str] = field(default_factory=frozenset)
    feature_type_exclude: FrozenSet[str] = field(default_factory=frozenset)
    image_pattern: Optional[str] = None
    group_id_max_length: int = 20
    group_id_hash_suffix: bool = False
    progress_interval: int = 500

    def __post_init__(self):
        if not 1 <= self.group_id_max_length <= GROUP_ID_FIELD_LENGTH:
            raise ImproperlyConfigured(
                f"CATALOG_FEATURE_GROUP_ID_MAX_LENGTH must be between 1 and "
                f"{GROUP_ID_FIELD_LENGTH}, got {self.group_id_max_length}"
            )

    @classmethod
    def from_settings(cls):
        prefix = getattr(settings, 'CATALOG_IMAGE_URL_PREFIX', '') or ''
        filename_format = getattr(settings, 'CATALOG_IMAGE_FILENAME_FORMAT', '') or ''
        image_pattern = None
        if filename_format:
            image_pattern = prefix.rstrip('/') + '/' + filename_format

        return cls(
            feature_type_include=split_setting(
                getattr(settings, 'CATALOG_FEATURE_TYPE_INCLUDE', '')
            ),
            feature_type_exclude=split_setting(
                getattr(settings, 'CATALOG_FEATURE_TYPE_EXCLUDE', '')
            ),
            image_pattern=image_pattern,
            group_id_max_length=getattr(settings, 'CATALOG_FEATURE_GROUP_ID_MAX_LENGTH', 20),
            group_id_hash_suffix=getattr(settings, 'CATALOG_FEATURE_GROUP_ID_HASH_SUFFIX', False),
            progress_interval=getattr(settings, 'CATALOG_PROGRESS_INTERVAL', 500),
        )
