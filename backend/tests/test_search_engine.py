"""
Tests for search_engine: compose_api_error and classify_search_response
are pure; search_flights runs against a mocked FlightDataClient.
"""
import pytest

from skyform.services.errors import (
    NO_FLIGHTS_MESSAGE,
    EmptyResultError,
    MalformedResponseError,
    StructuredApiError,
    ValidationError,
)
from skyform.services.search_engine import (
    classify_search_response,
    compose_api_error,
    require_selection,
    search_flights,
)


# ---------------------------------------------------------------------------
# compose_api_error
# ---------------------------------------------------------------------------

class TestComposeApiError:

    def test_entries_joined_with_pipe(self):
        assert compose_api_error([{"a": "x"}, {"b": "y"}]) == "Error: x | y"

    def test_values_inside_entry_joined_with_comma(self):
        messages = [{"date": "Date must be in the future", "code": 400}]
        assert compose_api_error(messages) == "Error: Date must be in the future, 400"

    def test_plain_string_message(self):
        assert compose_api_error("Something went wrong") == "Error: Something went wrong"

    def test_non_dict_entries_rendered_as_text(self):
        assert compose_api_error([{"a": "x"}, "raw"]) == "Error: x | raw"


# ---------------------------------------------------------------------------
# classify_search_response
# ---------------------------------------------------------------------------

class TestClassifySearchResponse:

    def test_structured_failure(self):
        payload = {"status": False, "message": [{"a": "x"}, {"b": "y"}]}

        with pytest.raises(StructuredApiError) as exc_info:
            classify_search_response(payload)

        assert exc_info.value.message == "Error: x | y"

    def test_structured_failure_wins_over_everything(self, itineraries_payload):
        payload = {
            "status": False,
            "message": [{"originSkyId": "invalid"}],
            "context": {"status": "failure", "totalResults": 0},
            "data": {"itineraries": itineraries_payload},
        }

        with pytest.raises(StructuredApiError):
            classify_search_response(payload)

    def test_no_flights_even_with_data(self, itineraries_payload):
        payload = {
            "status": True,
            "context": {"status": "failure", "totalResults": 0},
            "data": {"itineraries": itineraries_payload},
        }

        with pytest.raises(EmptyResultError) as exc_info:
            classify_search_response(payload)

        assert exc_info.value.message == NO_FLIGHTS_MESSAGE

    def test_failure_with_results_is_not_empty(self, itineraries_payload):
        payload = {
            "context": {"status": "failure", "totalResults": 2},
            "data": {"itineraries": itineraries_payload},
        }

        assert len(classify_search_response(payload)) == 2

    def test_itineraries_order_preserved(self, success_response):
        result = classify_search_response(success_response)

        assert [i.id for i in result] == ["it-expensive", "it-cheap"]
        assert result[1].price.formatted == "$129"
        leg = result[0].legs[0]
        assert leg.origin.display_code == "TUN"
        assert leg.duration_in_minutes == 145
        assert [c.name for c in leg.carriers.marketing] == ["Tunisair"]

    def test_missing_data_is_empty_list(self):
        assert classify_search_response({"status": True}) == []

    def test_missing_itineraries_is_empty_list(self):
        assert classify_search_response({"data": {}}) == []

    def test_itineraries_wrong_type_is_malformed(self):
        with pytest.raises(MalformedResponseError):
            classify_search_response({"data": {"itineraries": "none"}})

    def test_invalid_itinerary_skipped(self, itineraries_payload):
        payload = {"data": {"itineraries": [itineraries_payload[0], {"id": "broken"}]}}

        result = classify_search_response(payload)

        assert [i.id for i in result] == ["it-expensive"]


# ---------------------------------------------------------------------------
# search_flights
# ---------------------------------------------------------------------------

class TestSearchFlights:

    async def test_one_call_with_params_from_selection(
        self, mock_client, airport_tun, airport_cdg, flight_date, success_response
    ):
        mock_client.search_flights.return_value = success_response

        result = await search_flights(mock_client, airport_tun, airport_cdg, flight_date)

        mock_client.search_flights.assert_awaited_once_with(
            origin_sky_id="TUN",
            origin_entity_id="95673497",
            destination_sky_id="CDG",
            destination_entity_id="95565041",
            flight_date=flight_date,
        )
        assert len(result) == 2

    @pytest.mark.parametrize("missing", ["origin", "destination", "both"])
    async def test_missing_airport_no_call(self, mock_client, airport_tun, airport_cdg, flight_date, missing):
        origin = None if missing in ("origin", "both") else airport_tun
        destination = None if missing in ("destination", "both") else airport_cdg

        with pytest.raises(ValidationError):
            await search_flights(mock_client, origin, destination, flight_date)

        mock_client.search_flights.assert_not_called()


class TestRequireSelection:

    def test_both_selected(self, airport_tun, airport_cdg):
        assert require_selection(airport_tun, airport_cdg) == (airport_tun, airport_cdg)

    def test_missing_carries_user_message(self, airport_tun):
        with pytest.raises(ValidationError) as exc_info:
            require_selection(airport_tun, None)

        assert exc_info.value.message == "Please select both departure and destination airports."
