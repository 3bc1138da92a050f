from django.urls import path
from .views import PickerSearchView, PickerLabelView

urlpatterns = [
    path('<str:entity_type>/', PickerSearchView.as_view(), name='picker-search'),
    path('<str:entity_type>/<str:key>/', PickerLabelView.as_view(), name='picker-label'),
]
