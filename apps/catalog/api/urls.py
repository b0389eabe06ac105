from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import FeatureGroupViewSet, ProductViewSet

router = DefaultRouter()
router.register(r'feature-groups', FeatureGroupViewSet, basename='feature-group')
router.register(r'products', ProductViewSet, basename='product')

urlpatterns = [
    path('', include(router.urls)),
]
