# mangascraper

The domain layer and service layer of a manga scraping and search backend.
It holds the scrape-request and series models with their validation rules,
a circuit breaker, and services that sit between repositories you supply
and the rest of an application. It has no dependencies outside the
standard library.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `mangascraper.errors`: `ErrorCode` (`UNKNOWN`, `INVALID_INPUT`) and
  `ServiceError`. A `ServiceError` has a `code` and a `message`; when it
  was raised from another exception, `str()` gives `"message: cause"`.
- `mangascraper.scrape_requests`: `ScrapeRequest`,
  `CreateScrapeRequestParams`, `UpdateScrapeRequestParams`,
  `FindScrapeRequestParams`, the `ScrapeRequestStatus` and
  `ScrapeRequestType` enums, the result records `SeriesListResult`,
  `SeriesDetailResult`, `ChapterListResult`, `ChapterDetailResult`, and
  `TSReaderScript` with `TSReaderScript.from_dict()` for a decoded reader
  configuration. `ScrapeRequest.to_dict()` and
  `CreateScrapeRequestParams.to_dict()` give the JSON form (`baseURL`,
  `requestPath`, ...), leaving out empty optional fields.
- `mangascraper.series`: `Series` (with `to_dict()`), `SeriesBC`,
  `Breadcrumb`, `SortOrder`, `new_sort_order()` (anything other than
  `"desc"` gives `SortOrder.ASC`), and the parameter models
  `CreateInitSeriesParams`, `FindSeriesParams`, `UpdateInitSeriesParams`
  and `UpdateLatestSeriesParams`.
- `mangascraper.circuitbreaker`: `CircuitBreaker` and `CircuitState`.
- `mangascraper.chapter_service`, `mangascraper.provider_service`,
  `mangascraper.scraper_service`, `mangascraper.series_service`: the
  services `ChapterService`, `ProviderService`, `ScraperService` and
  `SeriesService`.

## Validation

Parameter models have a `validate()` method that raises `ServiceError`
with code `INVALID_INPUT` for the first missing field.

```python
from mangascraper.errors import ServiceError
from mangascraper.series import CreateInitSeriesParams

params = CreateInitSeriesParams(provider="p", slug="", title="t", source_path="/s")
try:
    params.validate()
except ServiceError as err:
    print(err.code.value, err)   # invalid_input slug is required
```

`CreateScrapeRequestParams.validate()` always requires type, base URL,
request path, status and provider; `SERIES_DETAIL` and `CHAPTER_LIST`
requests also need `series`, and `CHAPTER_DETAIL` requests need both
`series` and `chapter`.

## Services

A service accepts any object that has the repository methods it calls,
named in snake case: `create_init`, `find`, `find_bc`, `find_all`,
`find_paginated`, `update_init`, `update_latest`, `delete` and so on for
repositories; `search`, `index` and `delete(provider, slug)` for the
series search index; `created(receipt)` for the scrape-request message
broker.

Parameters are validated first where the service calls for it; a failed
validation is raised as a `ServiceError` with code `INVALID_INPUT`. Any
exception from a repository, index or broker is raised as a `ServiceError`
with code `UNKNOWN`, chained to the original.

```python
from mangascraper.series import FindSeriesParams
from mangascraper.series_service import SeriesService

service = SeriesService(repo=my_series_repo, search=my_search_index, logger=my_logger)
series = service.find(FindSeriesParams(provider="some-provider", slug="some-series"))
results = service.search("one piece")
```

`SeriesService.create_init`, `update_init` and `update_latest` index the
stored series after writing it, and `delete` removes it from both the
repository and the index. `SeriesService.index` indexes a sequence of
series and stops at the first failure.

## Circuit breaker

`SeriesService.search`, `SeriesService.index` and `ScraperService.create`
go through a `CircuitBreaker`. Three consecutive failures open it; while
it is open those calls raise `ServiceError("circuit breaker is open")` at
once. After two minutes it turns half-open: the next success closes it,
the next failure opens it again. Each state change is passed to the
logger's `info()` method in the style of the standard `logging` module; if
no logger is given, a module logger is used.

`CircuitBreaker` can be used on its own:

```python
from mangascraper.circuitbreaker import CircuitBreaker

breaker = CircuitBreaker(open_timeout=30.0, failure_threshold=5)
if breaker.ready():
    error = None
    try:
        call_something()
    except Exception as exc:
        error = exc
    breaker.done(error)
```

## What the package does not do

It does no scraping, storage, searching or messaging of its own: the
repositories, search index and message broker are objects you provide.
It has no HTTP API, no scheduler and no command-line program. It does not
define chapter or provider models; `ChapterService` and `ProviderService`
pass whatever parameter objects they are given to the repository, calling
their `validate()` method where validation applies.