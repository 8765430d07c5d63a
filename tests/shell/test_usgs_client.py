"""Tests for the USGS feed client.

Uses the `responses` library to mock HTTP requests.
"""

import pytest
import requests
import responses

from quakefeed.core.filters import TimeWindow
from quakefeed.shell.usgs_client import USGSClient


BASE_URL = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary"
DETAIL_URL = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/detail/us7000abcd.geojson"

SAMPLE_GEOJSON = {
    "type": "FeatureCollection",
    "features": [
        {
            "type": "Feature",
            "id": "us7000abcd",
            "properties": {"mag": 5.1, "place": "Fiji", "time": 1703001600000},
            "geometry": {"type": "Point", "coordinates": [178.0, -18.0, 550.0]},
        }
    ],
}


class TestFetchFeed:
    """Tests for USGSClient.fetch_feed()."""

    @responses.activate
    def test_fetches_window_feed(self):
        responses.add(
            responses.GET,
            f"{BASE_URL}/all_week.geojson",
            json=SAMPLE_GEOJSON,
            status=200,
        )

        client = USGSClient(base_url=BASE_URL)
        data = client.fetch_feed(TimeWindow.WEEK)

        assert data == SAMPLE_GEOJSON
        assert len(responses.calls) == 1

    @responses.activate
    def test_each_window_has_its_own_feed(self):
        for name in ("hour", "day", "week", "month"):
            responses.add(
                responses.GET,
                f"{BASE_URL}/all_{name}.geojson",
                json={"features": []},
            )

        client = USGSClient(base_url=BASE_URL)
        for window in TimeWindow:
            client.fetch_feed(window)

        urls = [call.request.url for call in responses.calls]
        assert urls == [f"{BASE_URL}/all_{w.feed_name}.geojson" for w in TimeWindow]

    @responses.activate
    def test_http_error_raises(self):
        responses.add(
            responses.GET,
            f"{BASE_URL}/all_day.geojson",
            status=503,
        )

        client = USGSClient(base_url=BASE_URL)

        with pytest.raises(requests.HTTPError):
            client.fetch_feed(TimeWindow.DAY)

    @responses.activate
    def test_invalid_json_raises_value_error(self):
        responses.add(
            responses.GET,
            f"{BASE_URL}/all_day.geojson",
            body="<html>maintenance</html>",
            status=200,
        )

        client = USGSClient(base_url=BASE_URL)

        # requests' JSONDecodeError subclasses ValueError
        with pytest.raises(ValueError):
            client.fetch_feed(TimeWindow.DAY)

    @responses.activate
    def test_timeout_raises(self):
        responses.add(
            responses.GET,
            f"{BASE_URL}/all_hour.geojson",
            body=requests.Timeout("timed out"),
        )

        client = USGSClient(base_url=BASE_URL, timeout=1)

        with pytest.raises(requests.Timeout):
            client.fetch_feed(TimeWindow.HOUR)

    def test_uses_given_session(self):
        session = requests.Session()
        client = USGSClient(session=session)

        assert client.session is session


class TestFetchEventDetail:
    """Tests for USGSClient.fetch_event_detail()."""

    @responses.activate
    def test_fetches_detail(self):
        detail = {"id": "us7000abcd", "properties": {"products": {}}}
        responses.add(responses.GET, DETAIL_URL, json=detail)

        client = USGSClient()

        assert client.fetch_event_detail(DETAIL_URL) == detail

    def test_empty_url_raises(self):
        client = USGSClient()

        with pytest.raises(ValueError, match="Detail URL is required"):
            client.fetch_event_detail("")
