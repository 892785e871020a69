"""
Browser search form, served as a single HTML page.

The page keeps no logic of its own: it forwards every input change to the
session endpoints and re-renders from the returned session state.
"""
import html
import json

from skyform.config import settings
from skyform.models.countries import COUNTRY_OPTIONS, country_label


def _country_options() -> list[dict[str, str]]:
    options = [{"value": code, "label": label} for code, label in COUNTRY_OPTIONS]
    known = {code for code, _ in COUNTRY_OPTIONS}
    # Configured defaults must always be selectable
    for code in (settings.default_departure_country, settings.default_destination_country):
        if code and code not in known:
            options.append({"value": code, "label": country_label(code)})
            known.add(code)
    return options


_PAGE = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>__TITLE__</title>
  <style>
    body { font-family: system-ui, sans-serif; margin: 0; background: #f5f7fb; color: #1c2333; }
    main { max-width: 36rem; margin: 0 auto; padding: 1rem; }
    h1 { font-size: 1.25rem; text-align: center; }
    label { display: block; font-size: .875rem; font-weight: 600; margin-bottom: .5rem; }
    .field { margin-bottom: 1rem; }
    select, input, button { width: 100%; padding: .5rem; border: 1px solid #c9d1e0; border-radius: .375rem; box-sizing: border-box; }
    button { background: #3b82f6; color: #fff; border: none; cursor: pointer; }
    .error { color: #dc2626; }
    .itinerary-card { background: #fff; border-radius: .5rem; padding: .75rem 1rem; margin-bottom: .75rem; }
    .leg { border-top: 1px solid #eef1f6; padding-top: .5rem; }
    .leg p { margin: .25rem 0; }
  </style>
</head>
<body>
  <main>
    <h1>Flight Search</h1>

    <div class="field">
      <label for="originCountry">Departure Country</label>
      <select id="originCountry" data-role="origin" class="country"></select>
    </div>
    <div class="field">
      <label>Departure Airport</label>
      <div id="originAirportBox"></div>
    </div>

    <div class="field">
      <label for="destinationCountry">Destination Country</label>
      <select id="destinationCountry" data-role="destination" class="country"></select>
    </div>
    <div class="field">
      <label>Destination Airport</label>
      <div id="destinationAirportBox"></div>
    </div>

    <div class="field">
      <label for="flightDate">Flight Date</label>
      <input id="flightDate" type="date" />
    </div>

    <div class="field">
      <button id="searchButton" type="button">Search Flights</button>
    </div>

    <p id="error" class="error"></p>
    <div id="results"></div>
  </main>

  <script>
    const COUNTRIES = __COUNTRIES__;
    const API = '/api/v1/sessions';
    let sessionId = null;
    let state = null;
    const pending = { origin: false, destination: false, search: false };

    const escapeHtml = (value) => String(value ?? '').replace(/[&<>"']/g, (c) => (
      { '&': '&amp;', '<': '&lt;', '>': '&gt;', '"': '&quot;', "'": '&#39;' }[c]
    ));
    const formatDateTime = (value) => value ? new Date(value).toLocaleString() : '';

    async function call(method, path, body) {
      const res = await fetch(API + path, {
        method,
        headers: { 'Content-Type': 'application/json' },
        body: body === undefined ? undefined : JSON.stringify(body),
      });
      if (!res.ok) {
        const detail = await res.json().catch(() => ({}));
        throw new Error(detail.detail || res.statusText);
      }
      return res.json();
    }

    function renderCountries() {
      for (const select of document.querySelectorAll('select.country')) {
        select.innerHTML = COUNTRIES.map((c) =>
          `<option value="${escapeHtml(c.value)}">${escapeHtml(c.label)}</option>`).join('');
      }
    }

    function renderAirports(role) {
      const box = document.getElementById(role + 'AirportBox');
      const roleState = state[role];
      if (pending[role] || roleState.status === 'loading') {
        box.innerHTML = '<p>Loading airports...</p>';
        return;
      }
      const airports = roleState.airports || [];
      const selected = roleState.selected ? roleState.selected.skyId : '';
      const options = airports.length === 0
        ? '<option value="">No airports available</option>'
        : '<option value="">Select an airport</option>' + airports.map((a) => {
            const label = a.presentation.subtitle
              ? `${a.presentation.title} - ${a.presentation.subtitle}` : a.presentation.title;
            const isSelected = a.skyId === selected ? ' selected' : '';
            return `<option value="${escapeHtml(a.skyId)}"${isSelected}>${escapeHtml(label)}</option>`;
          }).join('');
      box.innerHTML = `<select data-role="${role}" class="airport">${options}</select>`;
      box.querySelector('select').addEventListener('change', onAirportChange);
    }

    function renderResults() {
      const results = document.getElementById('results');
      if (pending.search || state.searching) {
        results.innerHTML = '<p>Searching flights...</p>';
        return;
      }
      results.innerHTML = (state.itineraries || []).map((itinerary) => `
        <div class="itinerary-card">
          <h2>Itinerary: ${escapeHtml(itinerary.id)}</h2>
          <p>Price: ${escapeHtml(itinerary.price.formatted)}</p>
          ${itinerary.legs.map((leg, index) => `
            <div class="leg">
              <p><strong>Flight ${index + 1}:</strong> ${escapeHtml(leg.origin.name)} (${escapeHtml(leg.origin.city)})
                 to ${escapeHtml(leg.destination.name)} (${escapeHtml(leg.destination.city)})</p>
              <p><strong>Departure:</strong> ${escapeHtml(formatDateTime(leg.departure))}</p>
              <p><strong>Arrival:</strong> ${escapeHtml(formatDateTime(leg.arrival))}</p>
              <p><strong>Duration:</strong> ${escapeHtml(leg.durationInMinutes)} minutes</p>
              <p><strong>Carriers:</strong> ${escapeHtml(leg.carriers.marketing.map((c) => c.name).join(', '))}</p>
            </div>`).join('')}
        </div>`).join('');
    }

    function render() {
      if (!state) return;
      document.getElementById('originCountry').value = state.origin.country;
      document.getElementById('destinationCountry').value = state.destination.country;
      document.getElementById('flightDate').value = state.flight_date;
      document.getElementById('error').textContent = state.error || '';
      renderAirports('origin');
      renderAirports('destination');
      renderResults();
    }

    function showError(err) {
      document.getElementById('error').textContent = err.message;
    }

    async function onCountryChange(event) {
      const role = event.target.dataset.role;
      pending[role] = true;
      render();
      try {
        state = await call('PUT', `/${sessionId}/countries/${role}`, { country: event.target.value });
      } catch (err) {
        showError(err);
      } finally {
        pending[role] = false;
        render();
      }
    }

    async function onAirportChange(event) {
      const role = event.target.dataset.role;
      try {
        state = await call('PUT', `/${sessionId}/airports/${role}`, { sky_id: event.target.value || null });
        render();
      } catch (err) {
        showError(err);
      }
    }

    async function onDateChange(event) {
      try {
        state = await call('PUT', `/${sessionId}/date`, { flight_date: event.target.value });
        render();
      } catch (err) {
        showError(err);
      }
    }

    async function onSearch() {
      pending.search = true;
      render();
      try {
        state = await call('POST', `/${sessionId}/search`);
      } catch (err) {
        showError(err);
      } finally {
        pending.search = false;
        render();
      }
    }

    async function start() {
      renderCountries();
      pending.origin = pending.destination = true;
      document.getElementById('originAirportBox').innerHTML = '<p>Loading airports...</p>';
      document.getElementById('destinationAirportBox').innerHTML = '<p>Loading airports...</p>';
      try {
        state = await call('POST', '');
        sessionId = state.session_id;
      } catch (err) {
        showError(err);
      } finally {
        pending.origin = pending.destination = false;
        render();
      }
    }

    for (const select of document.querySelectorAll('select.country')) {
      select.addEventListener('change', onCountryChange);
    }
    document.getElementById('flightDate').addEventListener('change', onDateChange);
    document.getElementById('searchButton').addEventListener('click', onSearch);
    start();
  </script>
</body>
</html>
"""


def build_homepage(title: str = "Flight Search") -> str:
    return (
        _PAGE
        .replace("__TITLE__", html.escape(title))
        .replace("__COUNTRIES__", json.dumps(_country_options()))
    )
