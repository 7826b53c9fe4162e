"""Tests for the API layer: health and board analysis."""

import pytest
from fastapi.testclient import TestClient

from slingo.config import DEFAULT_CONFIG
from slingo.main import app

NUMBERS = [[c * 15 + r + 1 for c in range(5)] for r in range(5)]


@pytest.fixture(scope="module")
def client():
    with TestClient(app) as c:
        yield c


def payload(covered, *draws, numbers=NUMBERS):
    board_state = {"covered_positions": covered}
    if numbers is not None:
        board_state["board_numbers"] = numbers
    return {
        "board_state": board_state,
        "draws": [{"positions": list(d)} for d in draws],
    }


SUPER_AND_WILD = ["super_wild", "wild", "none", "none", "none"]


# --- Health ---

class TestHealth:
    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


# --- Analyze ---

class TestAnalyze:
    def test_completes_diagonal(self, client):
        resp = client.post("/api/analyze", json=payload([[0, 0], [1, 3], [2, 2], [3, 3]], SUPER_AND_WILD))
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "success"
        assert len(data["optimal_selections"]) == 1
        sel = data["optimal_selections"][0]
        assert sel["row"] == 1
        assert sel["positions"] == SUPER_AND_WILD
        assert sel["wild_placements"] == [{"row": 2, "column": 2}]
        assert sel["super_wild_placements"] == [{"row": 5, "column": 5}]
        assert sel["expected_score"] > 10000
        assert sel["reasoning"].startswith("Completes 1 Slingo")
        assert sel["search_mode"] == "exhaustive"

    def test_analysis_fields(self, client):
        resp = client.post("/api/analyze", json=payload([[0, 0], [1, 3], [2, 2], [3, 3]], SUPER_AND_WILD))
        analysis = resp.json()["analysis"]
        assert analysis["current_lines_completed"] == 0
        assert analysis["potential_lines_completed"] == 1
        assert analysis["covered_cell_count"] == 6
        assert analysis["total_cells"] == 25
        assert analysis["completion_percentage"] == 24.0
        assert analysis["probability_breakdown"]["slingo_completion"] == 100.0
        assert analysis["board_state"]["board_numbers"] == NUMBERS
        assert analysis["projected_board_state"]["current_slingos"] == 1

    def test_sparse_board_sets_up(self, client):
        resp = client.post("/api/analyze", json=payload([[0, 0], [2, 2]], SUPER_AND_WILD))
        sel = resp.json()["optimal_selections"][0]
        assert 0 < sel["expected_score"] < DEFAULT_CONFIG.weights.line_completion
        assert "Sets up" in sel["reasoning"]

    def test_heuristic_mode(self, client):
        resp = client.post("/api/analyze", json=payload([], ["super_wild"] * 5))
        assert resp.status_code == 200
        sel = resp.json()["optimal_selections"][0]
        assert sel["search_mode"] == "heuristic"
        assert len(sel["super_wild_placements"]) == 5

    def test_three_rows(self, client):
        resp = client.post("/api/analyze", json=payload(
            [[0, 0]], SUPER_AND_WILD, ["none"] * 5, ["wild", "none", "none", "none", "wild"]))
        assert resp.status_code == 200
        rows = [s["row"] for s in resp.json()["optimal_selections"]]
        assert rows == [1, 3]

    def test_rows_numbered_by_request_order(self, client):
        body = payload([[0, 0]], SUPER_AND_WILD, SUPER_AND_WILD)
        body["draws"][0]["row"] = 7
        body["draws"][1]["row"] = 3
        resp = client.post("/api/analyze", json=body)
        assert resp.status_code == 200
        assert [s["row"] for s in resp.json()["optimal_selections"]] == [1, 2]

    def test_out_of_range_positions_ignored(self, client):
        resp = client.post("/api/analyze", json=payload([[0, 0], [9, 9], [-1, 2]], SUPER_AND_WILD))
        assert resp.status_code == 200
        assert resp.json()["analysis"]["original_covered_cell_count"] == 1

    def test_board_numbers_optional(self, client):
        resp = client.post("/api/analyze", json=payload([[0, 0]], SUPER_AND_WILD, numbers=None))
        assert resp.status_code == 200
        assert len(resp.json()["analysis"]["board_state"]["board_numbers"]) == 5


class TestAnalyzeErrors:
    def test_no_draws(self, client):
        resp = client.post("/api/analyze", json=payload([[0, 0]]))
        assert resp.status_code == 400
        assert "At least one draw row is required" in resp.json()["detail"]

    def test_too_many_draws(self, client):
        resp = client.post("/api/analyze", json=payload([], *[["none"] * 5] * 4))
        assert resp.status_code == 400
        assert "Maximum 3 draw rows allowed" in resp.json()["detail"]

    def test_short_row(self, client):
        resp = client.post("/api/analyze", json=payload([], ["wild", "none"]))
        assert resp.status_code == 400
        assert "must have exactly 5 positions" in resp.json()["detail"]

    def test_unknown_label(self, client):
        resp = client.post("/api/analyze", json=payload([], ["wild", "none", "none", "none", "joker"]))
        assert resp.status_code == 400
        assert "Invalid position value: joker" in resp.json()["detail"]

    def test_bad_board_grid(self, client):
        resp = client.post("/api/analyze", json=payload([], SUPER_AND_WILD, numbers=[[1, 2, 3]]))
        assert resp.status_code == 400

    def test_missing_board_state(self, client):
        resp = client.post("/api/analyze", json={"draws": [{"positions": SUPER_AND_WILD}]})
        assert resp.status_code == 422

    def test_non_integer_position(self, client):
        resp = client.post("/api/analyze", json=payload([["a", "b"]], SUPER_AND_WILD))
        assert resp.status_code == 422
