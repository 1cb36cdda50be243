from django.urls import path, include
from rest_framework.routers import SimpleRouter

from .views import VoucherViewSet

# mounted at api/vouchers/, so the viewset sits on the empty prefix
router = SimpleRouter()
router.register(r'', VoucherViewSet, basename='voucher')

urlpatterns = [
    path('', include(router.urls)),
]
