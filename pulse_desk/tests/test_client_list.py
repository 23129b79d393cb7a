"""Client list filtering and empty states."""

from __future__ import annotations

from pulse_desk.schemas.client import Client
from pulse_desk.services.client_list import (
    EMPTY, LOADING_FAILED, NO_RESULTS, OK, filter_clients, list_state,
)

CLIENTS = [
    Client(id="1", name="CMYK Impressão Digital", company="CMYK IMPRESSÃO DIGITAL LTDA",
           email="contato@cmyk.com.br", status="client", value=1700),
    Client(id="2", name="João Silva", company="Empresa ABC Ltda",
           email="joao@empresaabc.com", status="prospect", value=2500),
    Client(id="3", name="Maria Santos", company="Tech Solutions", email=None, status="lead"),
]


def test_empty_term_returns_everything():
    assert filter_clients(CLIENTS, "") == CLIENTS
    assert filter_clients(CLIENTS, None) == CLIENTS


def test_blank_term_is_matched_as_typed():
    assert filter_clients(CLIENTS, "   ") == []
    assert [c.id for c in filter_clients(CLIENTS, " ")] == ["1", "2", "3"]


def test_case_insensitive_name_match():
    assert [c.id for c in filter_clients(CLIENTS, "cmyk")] == ["1"]


def test_matches_company_and_email():
    assert [c.id for c in filter_clients(CLIENTS, "abc ltda")] == ["2"]
    assert [c.id for c in filter_clients(CLIENTS, "@empresaabc")] == ["2"]


def test_missing_email_is_not_a_match():
    assert filter_clients(CLIENTS, "techsolutions.com") == []
    assert [c.id for c in filter_clients(CLIENTS, "tech")] == ["3"]


def test_list_states():
    assert list_state([], [], failed=True) == LOADING_FAILED
    assert list_state([], []) == EMPTY
    assert list_state(CLIENTS, []) == NO_RESULTS
    assert list_state(CLIENTS, CLIENTS[:1]) == OK
