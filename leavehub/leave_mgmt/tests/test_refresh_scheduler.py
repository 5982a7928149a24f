import pytest

from leave_mgmt.services.refresh_scheduler import RefreshScheduler


class FakeExecutor:
    def __init__(self):
        self.submitted = []

    def submit(self, fn, *args, **kwargs):
        self.submitted.append((fn, args, kwargs))

    def shutdown(self, wait=True):
        pass


def test_sync_mode_refreshes_inline(settings, refresh_spy):
    settings.ORG_STATS_REFRESH_ASYNC = False
    s = RefreshScheduler()

    s.run()
    s.run()

    assert len(refresh_spy) == 2


def test_async_mode_folds_requests_while_queued(settings, refresh_spy):
    settings.ORG_STATS_REFRESH_ASYNC = True
    s = RefreshScheduler()
    executor = FakeExecutor()
    s._executor = executor

    s.run()
    s.run()
    s.run()

    assert len(executor.submitted) == 1
    assert refresh_spy == []

    fn, args, kwargs = executor.submitted[0]
    fn(*args, **kwargs)
    assert len(refresh_spy) == 1

    # once the worker picked the job up, a new request queues another run
    s.run()
    assert len(executor.submitted) == 2


def test_async_worker_is_created_lazily_and_runs(settings, refresh_spy):
    settings.ORG_STATS_REFRESH_ASYNC = True
    s = RefreshScheduler()
    assert s._executor is None

    s.run()
    s.shutdown(wait=True)

    assert len(refresh_spy) == 1


class DeadExecutor(FakeExecutor):
    def submit(self, fn, *args, **kwargs):
        raise RuntimeError("cannot schedule new futures after shutdown")


def test_failed_submit_does_not_block_later_refreshes(settings, refresh_spy):
    settings.ORG_STATS_REFRESH_ASYNC = True
    s = RefreshScheduler()
    s._executor = DeadExecutor()

    with pytest.raises(RuntimeError):
        s.run()

    assert s._queued is False
    assert s._executor is None

    executor = FakeExecutor()
    s._executor = executor
    s.run()
    assert len(executor.submitted) == 1
