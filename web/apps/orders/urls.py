from django.urls import path

from .views import ConfirmOrderView, OrdersCollectionView, OrdersPingView, RetrieveOrderView

app_name = "orders"

urlpatterns = [
    path("ping/", OrdersPingView.as_view(), name="ping"),
    path("", OrdersCollectionView.as_view(), name="orders-collection"),  # POST create
    path("<str:oid>/", RetrieveOrderView.as_view(), name="orders-detail"),
    path("<str:oid>/confirm/", ConfirmOrderView.as_view(), name="orders-confirm"),
]
