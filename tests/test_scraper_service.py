import logging
from unittest.mock import Mock

import pytest

from mangascraper.circuitbreaker import CircuitState
from mangascraper.errors import ErrorCode, ServiceError
from mangascraper.scrape_requests import (
    FindScrapeRequestParams,
    ScrapeRequest,
    ScrapeRequestStatus,
    UpdateScrapeRequestParams,
    create_valid_scrape_request_params,
)
from mangascraper.scraper_service import ScraperService


@pytest.fixture
def repo():
    return Mock()


@pytest.fixture
def broker():
    return Mock()


@pytest.fixture
def service(repo, broker):
    return ScraperService(repo, broker, logging.getLogger("tests.scraper"))


def test_create_success_announces_receipt(service, repo, broker):
    receipt = ScrapeRequest(id="1", provider="validProvider")
    repo.create.return_value = receipt
    params = create_valid_scrape_request_params()

    assert service.create(params) == receipt
    repo.create.assert_called_once_with(params)
    broker.created.assert_called_once_with(receipt)


def test_create_validation_failure(service, repo, broker):
    params = create_valid_scrape_request_params()
    params.provider = ""
    with pytest.raises(ServiceError) as info:
        service.create(params)
    assert info.value.code is ErrorCode.INVALID_INPUT
    assert info.value.message == "params.Validate"
    assert info.value.__cause__.message == "provider is required"
    assert repo.create.call_count == 0
    assert broker.created.call_count == 0


def test_create_repo_error(service, repo, broker):
    repo.create.side_effect = RuntimeError("test error")
    with pytest.raises(ServiceError) as info:
        service.create(create_valid_scrape_request_params())
    assert info.value.code is ErrorCode.UNKNOWN
    assert info.value.message == "repo.Create"
    assert str(info.value) == "repo.Create: test error"
    assert broker.created.call_count == 0


def test_create_broker_error(service, repo, broker):
    repo.create.return_value = ScrapeRequest(id="1")
    broker.created.side_effect = RuntimeError("test error")
    with pytest.raises(ServiceError) as info:
        service.create(create_valid_scrape_request_params())
    assert info.value.message == "msgBroker.Create"
    assert isinstance(info.value.__cause__, RuntimeError)


def test_create_opens_breaker_after_three_failures(service, repo, caplog):
    repo.create.side_effect = RuntimeError("test error")
    with caplog.at_level(logging.INFO, logger="tests.scraper"):
        for _ in range(3):
            with pytest.raises(ServiceError) as info:
                service.create(create_valid_scrape_request_params())
            assert info.value.message == "repo.Create"

        with pytest.raises(ServiceError) as info:
            service.create(create_valid_scrape_request_params())

    assert info.value.message == "circuit breaker is open"
    assert info.value.code is ErrorCode.UNKNOWN
    assert info.value.__cause__ is None
    assert repo.create.call_count == 3
    assert f"{CircuitState.CLOSED.value} -> {CircuitState.OPEN.value}" in caplog.text


def test_validation_failures_count_towards_breaker(service, repo):
    params = create_valid_scrape_request_params()
    params.base_url = ""
    for _ in range(3):
        with pytest.raises(ServiceError):
            service.create(params)
    with pytest.raises(ServiceError) as info:
        service.create(create_valid_scrape_request_params())
    assert info.value.message == "circuit breaker is open"
    assert repo.create.call_count == 0


def test_success_resets_failure_run(service, repo):
    repo.create.side_effect = [
        RuntimeError("test error"),
        RuntimeError("test error"),
        ScrapeRequest(id="1"),
        RuntimeError("test error"),
        RuntimeError("test error"),
        ScrapeRequest(id="2"),
    ]
    results = []
    for _ in range(6):
        try:
            results.append(service.create(create_valid_scrape_request_params()).id)
        except ServiceError as exc:
            results.append(exc.message)
    assert results == ["repo.Create", "repo.Create", "1", "repo.Create", "repo.Create", "2"]


def test_default_logger_is_used_when_none_given(repo, broker):
    service = ScraperService(repo, broker, None)
    repo.create.return_value = ScrapeRequest(id="7")
    assert service.create(create_valid_scrape_request_params()).id == "7"


def test_find(service, repo):
    repo.find.return_value = ScrapeRequest(id="abc")
    assert service.find("abc").id == "abc"
    repo.find.assert_called_once_with("abc")


def test_find_error(service, repo):
    repo.find.side_effect = RuntimeError("test error")
    with pytest.raises(ServiceError) as info:
        service.find("abc")
    assert info.value.message == "repo.Find"


def test_find_pendings(service, repo):
    pending = [ScrapeRequest(id="1"), ScrapeRequest(id="2")]
    repo.find_pendings.return_value = pending
    params = FindScrapeRequestParams(status=ScrapeRequestStatus.PENDING)
    assert service.find_pendings(params) == pending
    repo.find_pendings.assert_called_once_with(params)


def test_find_pendings_error(service, repo):
    repo.find_pendings.side_effect = RuntimeError("test error")
    with pytest.raises(ServiceError) as info:
        service.find_pendings(FindScrapeRequestParams())
    assert info.value.message == "repo.FindPendings"


def test_update_passes_params_through(service, repo):
    updated = ScrapeRequest(id="1", status=ScrapeRequestStatus.COMPLETED)
    repo.update.return_value = updated
    params = UpdateScrapeRequestParams(id="1", status=ScrapeRequestStatus.COMPLETED)
    assert service.update(params) == updated
    repo.update.assert_called_once_with(params)


def test_update_error(service, repo):
    repo.update.side_effect = RuntimeError("test error")
    with pytest.raises(ServiceError) as info:
        service.update(UpdateScrapeRequestParams(id="1", status="COMPLETED"))
    assert info.value.message == "repo.Update"


def test_delete(service, repo):
    assert service.delete("1") is None
    repo.delete.assert_called_once_with("1")


def test_delete_error(service, repo):
    repo.delete.side_effect = RuntimeError("test error")
    with pytest.raises(ServiceError) as info:
        service.delete("1")
    assert info.value.code is ErrorCode.UNKNOWN
    assert info.value.message == "repo.Delete"