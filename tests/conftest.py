from datetime import datetime
import zipfile
from io import BytesIO

import pytest
from openpyxl import Workbook


def build_workbook(sheets):
    """Return XLSX bytes for ``{sheet_name: [row, ...]}``."""
    wb = Workbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(title=name)
        for row in rows:
            ws.append(list(row))
    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


@pytest.fixture
def sensor_workbook():
    return build_workbook(
        {
            "Soil Moisture": [
                ["Day", "Moisture"],
                [1, 31.5],
                [2, 30.0],
                [3, "offline"],
                [4, 28.25],
            ],
            "Air Temperature": [
                ["Reading", "Temp"],
                [datetime(2023, 3, 15, 12, 0), 18.5],
                [datetime(2023, 3, 16, 0, 0), 12.0],
            ],
            "Empty": [
                ["Day", "Value"],
            ],
        }
    )


@pytest.fixture
def fake_fetcher(sensor_workbook):
    calls = []

    def _fetch(url, timeout=10.0):
        calls.append((url, timeout))
        return sensor_workbook

    _fetch.calls = calls
    return _fetch


def corrupt_workbook(payload, entry="xl/workbook.xml", content=b"<workbook><sheets><sheet"):
    """Return ``payload`` with one zip entry replaced by truncated XML."""
    src = zipfile.ZipFile(BytesIO(payload))
    buf = BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as dst:
        for item in src.infolist():
            data = content if item.filename == entry else src.read(item.filename)
            dst.writestr(item, data)
    return buf.getvalue()


@pytest.fixture
def broken_workbook(sensor_workbook):
    return corrupt_workbook(sensor_workbook)
