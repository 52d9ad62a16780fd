import pytest
from rest_framework.test import APIClient

from duty_timeline.services import (
    ChartGeometry,
    ChartLayout,
    HoursAggregatorService,
    LogSheetRendererService,
    TimelineBuilderService,
)


@pytest.fixture
def builder():
    return TimelineBuilderService(placeholder_location="Unknown Location")


@pytest.fixture
def aggregator():
    return HoursAggregatorService()


@pytest.fixture
def renderer():
    return LogSheetRendererService()


@pytest.fixture
def geometry():
    # 800px wide: chart area 120px..720px, 25px per hour
    return ChartGeometry(width=800, height=200, layout=ChartLayout())


@pytest.fixture
def api_client():
    return APIClient()
