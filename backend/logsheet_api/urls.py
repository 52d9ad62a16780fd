"""
URL configuration for logsheet_api project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/4.2/topics/http/urls/
"""

from django.http import JsonResponse
from django.urls import include, path


def api_root(request):
    """API root endpoint with available endpoints."""
    return JsonResponse({
        'message': "Driver's Daily Log Sheet API",
        'version': '1.0',
        'endpoints': {
            'log_sheets': '/api/eld/',
        },
        'documentation': {
            'log_sheets': {
                'description': 'Duty status timelines and daily log sheet charts',
                'endpoints': {
                    'health': 'GET /api/eld/health/ - Service health check',
                    'timelines': 'POST /api/eld/timelines/ - Build day timelines with totals',
                    'render': 'POST /api/eld/log-sheets/render/ - Render one day as SVG, HTML or JSON',
                    'hit_test': 'POST /api/eld/log-sheets/hit-test/ - Find the segment under a pointer',
                }
            }
        }
    })


urlpatterns = [
    # API root
    path("api/", api_root, name='api-root'),

    # ELD log sheet API
    path("api/eld/", include("duty_timeline.urls")),
]
