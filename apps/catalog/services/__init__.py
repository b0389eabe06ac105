from .discontinuation import DiscontinuationService
from .feature_groups import FeatureGroupSyncService, build_feature_group_id
from .images import ProductImageService
from .merge import VirtualVariantMergeService, duplicate_related
from .runner import ServiceResult, run_service
from .temporal import filter_by_date, is_valid_at

__all__ = [
    'DiscontinuationService',
    'FeatureGroupSyncService',
    'build_feature_group_id',
    'ProductImageService',
    'VirtualVariantMergeService',
    'duplicate_related',
    'ServiceResult',
    'run_service',
    'filter_by_date',
    'is_valid_at',
]
