"""Tests for background job registration."""
import pytest

from formfiler import main


@pytest.fixture
def scheduler_env(monkeypatch):
    monkeypatch.setenv("RECLASSIFY_INTERVAL_MINUTES", "15")
    monkeypatch.setattr(main, "scheduler", None)
    yield
    main.shutdown_scheduler()


def test_registering_twice_keeps_one_job(scheduler_env):
    main.setup_scheduler()
    main.setup_scheduler()

    jobs = main.scheduler.get_jobs()
    assert [job.id for job in jobs] == [main.RECLASSIFY_JOB_ID]
    assert main.scheduler.running


def test_zero_interval_disables_the_job(monkeypatch):
    monkeypatch.setenv("RECLASSIFY_INTERVAL_MINUTES", "0")
    monkeypatch.setattr(main, "scheduler", None)

    main.setup_scheduler()

    assert main.scheduler is None
