"""
Data fetcher.

Pulls the mileage rows from the spreadsheet (through the Apps Script web app,
or straight from the sheet with gspread), decodes the payload and keeps only
rows that carry a real date and a positive mileage.
"""

import json
import logging
from typing import Any, Dict, List

import gspread
import requests
from google.oauth2.service_account import Credentials
from pydantic import ValidationError

from mileage_heatmap.config import Settings
from mileage_heatmap.errors import (
    ClientFetchError,
    MalformedUpstreamPayload,
    RowParseError,
    UpstreamUnavailable,
)
from mileage_heatmap.schema import Record, UpstreamRow

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]


def fetch_webapp_body(url: str, timeout: float) -> str:
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.HTTPError as exc:
        logger.error("Error details: %s", exc)
        if exc.response is not None:
            logger.error("Response status: %s", exc.response.status_code)
            logger.error("Response headers: %s", dict(exc.response.headers))
        raise UpstreamUnavailable(str(exc)) from exc
    except requests.RequestException as exc:
        logger.error("Error details: %s", exc)
        raise UpstreamUnavailable(str(exc)) from exc
    return resp.text


def decode_payload(body: Any) -> List[Any]:
    data = body
    # Apps Script sometimes double-encodes the array as a JSON string.
    for _ in range(2):
        if not isinstance(data, str):
            break
        try:
            data = json.loads(data)
        except ValueError as exc:
            logger.error("Failed to parse response: %s", exc)
            break
    if not isinstance(data, list):
        logger.error("Response is not an array: %s", type(data).__name__)
        raise MalformedUpstreamPayload("Invalid response format")
    return data


def get_worksheet(settings: Settings) -> gspread.Worksheet:
    if not settings.sheet_url or not settings.service_account_file:
        raise UpstreamUnavailable("Missing settings: GOOGLE_SHEET_URL or GOOGLE_SERVICE_ACCOUNT_FILE")
    try:
        creds = Credentials.from_service_account_file(settings.service_account_file, scopes=SCOPES)
        spreadsheet = gspread.authorize(creds).open_by_url(settings.sheet_url)
        return spreadsheet.worksheet(settings.worksheet_name)
    except gspread.WorksheetNotFound as exc:
        raise UpstreamUnavailable(f"Worksheet `{settings.worksheet_name}` not found.") from exc
    except (gspread.exceptions.GSpreadException, requests.RequestException, OSError, ValueError) as exc:
        raise UpstreamUnavailable(f"{type(exc).__name__}: {exc}") from exc


def fetch_sheet_rows(settings: Settings) -> List[Dict[str, Any]]:
    worksheet = get_worksheet(settings)
    try:
        return worksheet.get_all_records()
    except (gspread.exceptions.GSpreadException, requests.RequestException) as exc:
        raise UpstreamUnavailable(f"{type(exc).__name__}: {exc}") from exc


def parse_rows(rows: List[Any]) -> List[Record]:
    out: List[Record] = []
    for row in rows:
        try:
            if not isinstance(row, dict):
                raise RowParseError(f"row is {type(row).__name__}, not an object")
            out.append(UpstreamRow.model_validate(row).to_record())
        except (RowParseError, ValidationError) as exc:
            logger.debug("Skipping row %r: %s", row, exc)
    return out


def fetch_records(settings: Settings) -> List[Record]:
    if settings.source == "sheet":
        rows = fetch_sheet_rows(settings)
    else:
        rows = decode_payload(fetch_webapp_body(settings.upstream_url, settings.fetch_timeout))
    records = parse_rows(rows)
    logger.info("Sample of processed data: %s", [r.model_dump(mode="json") for r in records[:3]])
    return records


def load_api_records(api_url: str, timeout: float) -> List[Record]:
    """Client side of /api/data, used by the dashboard."""
    try:
        resp = requests.get(api_url, timeout=timeout)
        resp.raise_for_status()
        payload = resp.json()
        if not isinstance(payload, list):
            raise ClientFetchError(f"expected an array from {api_url}, got {type(payload).__name__}")
        return [Record.model_validate(item) for item in payload]
    except (requests.RequestException, ValueError) as exc:
        raise ClientFetchError(f"{type(exc).__name__}: {exc}") from exc
