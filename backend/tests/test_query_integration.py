import os

import pytest
import httpx

BASE_URL = os.getenv("HEALTHCONNECT_URL")


@pytest.mark.integration
@pytest.mark.skipif(not BASE_URL, reason="HEALTHCONNECT_URL not set")
def test_directory_roundtrip_against_deployment():
    client = httpx.Client(base_url=BASE_URL)
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["store"] == "ok"

    r = client.get("/doctors/", params={"region": "all", "sort": "fee-low"})
    assert r.status_code == 200
    fees = [d["consultation_fee"] for d in r.json()]
    assert fees == sorted(fees)
