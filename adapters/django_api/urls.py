"""
Folio Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views

_PERIOD = "guests/<str:guest_id>/stays/<str:room_id>/periods/<str:check_in_date>"

urlpatterns = [
    path("guests/<str:guest_id>/stays/<str:room_id>", views.guest_stays_view),
    path(_PERIOD, views.guest_stay_period_view),
    path(f"{_PERIOD}/charges", views.guest_stay_charges_view),
    path(f"{_PERIOD}/payments", views.guest_stay_payments_view),
]
