import pytest

import fetch_news
import tasks
from news_service import NewsFetchError


@pytest.fixture
def task(monkeypatch):
    monkeypatch.setattr(tasks.refresh_daily_news_task, "update_state", lambda **kwargs: None)
    return tasks.refresh_daily_news_task


def test_beat_schedule_runs_every_morning():
    entry = tasks.app.conf.beat_schedule["refresh-daily-news"]
    assert entry["task"] == "tasks.refresh_daily_news_task"
    assert entry["schedule"].hour == {7}
    assert entry["schedule"].minute == {0}


def test_task_returns_refresh_result(monkeypatch, task):
    calls = []

    def fake_refresh(force=False):
        calls.append(force)
        return {"success": True, "count": 20, "date": "2024-06-03"}

    monkeypatch.setattr(tasks, "refresh_daily_news", fake_refresh)
    assert task.run(force=True) == {"success": True, "count": 20, "date": "2024-06-03"}
    assert calls == [True]


def test_task_retries_on_fetch_error(monkeypatch, task):
    def fake_refresh(force=False):
        raise NewsFetchError("No news fetched from AI")

    monkeypatch.setattr(tasks, "refresh_daily_news", fake_refresh)
    # Called outside a worker, retry re-raises the original error
    with pytest.raises(NewsFetchError):
        task.run()


def test_cli_relies_on_config_for_env():
    # config loads .env once on import
    assert not hasattr(fetch_news, "load_dotenv")


def test_cli_fetch(monkeypatch):
    monkeypatch.setattr(fetch_news, "refresh_daily_news", lambda force=False: {"success": True, "force": force})
    assert fetch_news.main(["--force"]) == 0


def test_cli_reports_missing_credentials(monkeypatch):
    def fake_refresh(force=False):
        raise ValueError("Supabase credentials not found in environment variables")

    monkeypatch.setattr(fetch_news, "refresh_daily_news", fake_refresh)
    assert fetch_news.main([]) == 1


def test_cli_show(monkeypatch, capsys):
    items = [{"category": "tech", "title": "A公司融资", "publishDate": "2024-06-02", "content": "内容"}]
    monkeypatch.setattr(fetch_news, "load_news", lambda limit=20: items[:limit])
    assert fetch_news.main(["--show", "--limit", "1"]) == 0
    out = capsys.readouterr().out
    assert "[tech] A公司融资" in out
    assert "内容" in out
