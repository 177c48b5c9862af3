"""End-to-end pipeline tests with fake HTTP sessions and renderers."""

import random

import pandas as pd
import pytest
from PIL import Image

from gifhub.contracts import EmptyResultError, NetworkError, RenderError
from gifhub.encoding import PillowEncoder
from gifhub.pipeline.artifact_tracker import ArtifactTracker
from gifhub.pipeline.orchestrator import PipelineOrchestrator
from gifhub.scraper.client import ProfileClient
from tests.helpers.fake_frames import FailingRenderer, FakeRenderer, period_color
from tests.helpers.fake_profile import activity_session, periods_html

pytestmark = [pytest.mark.unit, pytest.mark.pipeline]

PERIODS = [str(y) for y in range(2011, 2021)]


def make_orchestrator(config, output_dirs, session, renderer=None, tracker=None):
    return PipelineOrchestrator(
        config,
        output_dirs,
        client=ProfileClient(config, session=session),
        renderer=renderer or FakeRenderer(max_delay=0.03),
        encoder=PillowEncoder(),
        tracker=tracker,
    )


def gif_frame_colors(path):
    colors = []
    with Image.open(path) as img:
        for i in range(img.n_frames):
            img.seek(i)
            colors.append(img.convert("RGB").getpixel((2, 2)))
    return colors


def all_active(periods):
    return {p: {"commits": 10 + i, "prs": i} for i, p in enumerate(periods)}


# ============================================================================
# Ordering and partial failure
# ============================================================================

@pytest.mark.parametrize("seed", [1, 2, 3])
def test_every_period_in_order_despite_random_completion(internal_config, output_dirs, seed):
    requested = PERIODS[:]
    random.Random(seed).shuffle(requested)
    session = activity_session(all_active(PERIODS), max_delay=0.05, seed=seed)
    orch = make_orchestrator(internal_config, output_dirs, session)

    path = orch.run("octocat", requested)

    assert path == output_dirs["base"] / "octocat.gif"
    assert gif_frame_colors(path) == [period_color(p) for p in PERIODS]


def test_failed_periods_are_missing_from_gif(internal_config, output_dirs):
    failing = {"2012", "2015", "2019"}
    ok = [p for p in PERIODS if p not in failing]
    session = activity_session(
        {p: v for p, v in all_active(PERIODS).items() if p in ok},
        max_delay=0.02,
        extra={f"from={p}": 502 for p in failing},
    )
    orch = make_orchestrator(internal_config, output_dirs, session)

    path = orch.run("octocat", PERIODS)

    assert gif_frame_colors(path) == [period_color(p) for p in ok]
    assert list(orch.get_results()["period"]) == ok


def test_all_fetches_failing_produces_no_artifact(internal_config, output_dirs):
    session = activity_session({}, extra={"from=": 500})
    orch = make_orchestrator(internal_config, output_dirs, session)

    with pytest.raises(EmptyResultError) as exc:
        orch.run("octocat", PERIODS[:3])

    assert exc.value.stage == "fetch"
    assert not (output_dirs["base"] / "octocat.gif").exists()


def test_render_failure_is_fatal(internal_config, output_dirs):
    session = activity_session(all_active(PERIODS[:4]))
    orch = make_orchestrator(internal_config, output_dirs, session,
                             renderer=FailingRenderer(failing={"2013"}))

    with pytest.raises(RenderError, match="2013"):
        orch.run("octocat", PERIODS[:4])

    assert not (output_dirs["base"] / "octocat.gif").exists()


# ============================================================================
# Period resolution
# ============================================================================

def test_duplicate_periods_render_once(internal_config, output_dirs):
    session = activity_session(all_active(["2018", "2019"]))
    orch = make_orchestrator(internal_config, output_dirs, session)

    path = orch.run("octocat", ["2019", "2018", "2019"])

    assert len(gif_frame_colors(path)) == 2
    assert len(session.calls) == 2


def test_periods_discovered_when_not_given(internal_config, output_dirs):
    session = activity_session(
        all_active(["2019", "2020"]),
        extra={"https://github.com/octocat": periods_html(["2020", "2019"])},
    )
    orch = make_orchestrator(internal_config, output_dirs, session)

    path = orch.run("octocat")

    assert gif_frame_colors(path) == [period_color("2019"), period_color("2020")]


def test_periods_from_config(make_config, output_dirs):
    config = make_config(PERIODS="2016,2017")
    session = activity_session(all_active(["2016", "2017", "2018"]))
    orch = make_orchestrator(config, output_dirs, session)

    orch.run("octocat")

    assert list(orch.get_results()["period"]) == ["2016", "2017"]


def test_no_periods_is_empty_source(internal_config, output_dirs):
    session = activity_session({}, extra={"https://github.com/octocat": periods_html([])})
    orch = make_orchestrator(internal_config, output_dirs, session)

    with pytest.raises(EmptyResultError) as exc:
        orch.run("octocat")
    assert exc.value.stage == "source"


def test_discovery_failure_propagates(internal_config, output_dirs):
    orch = make_orchestrator(internal_config, output_dirs, activity_session({}))

    with pytest.raises(NetworkError, match="404"):
        orch.run("octocat")


def test_cancel_before_run_fetches_nothing(internal_config, output_dirs):
    session = activity_session(all_active(PERIODS[:2]))
    orch = make_orchestrator(internal_config, output_dirs, session)
    orch.cancel()

    with pytest.raises(EmptyResultError) as exc:
        orch.run("octocat", PERIODS[:2])
    assert exc.value.stage == "fetch"
    assert session.calls == []


# ============================================================================
# Outputs
# ============================================================================

def test_gif_timing_and_scale(make_config, output_dirs):
    config = make_config(DURATION_MS=250, SCALE=0.5)
    session = activity_session(all_active(["2018", "2019"]))
    orch = make_orchestrator(config, output_dirs, session, renderer=FakeRenderer(size=(40, 30)))

    path = orch.run("octocat", ["2018", "2019"])

    with Image.open(path) as img:
        assert img.size == (20, 15)
        assert img.info["duration"] == 250


def test_activity_summary_csv(internal_config, output_dirs):
    session = activity_session({"2019": {"commits": 60, "issues": 5}, "2018": {"prs": 40}})
    orch = make_orchestrator(internal_config, output_dirs, session)

    orch.run("octocat", ["2019", "2018"])

    df = pd.read_csv(output_dirs["base"] / "octocat_activity.csv", dtype={"period": str})
    assert list(df.columns) == ["subject", "period", "commits", "issues", "prs", "code_reviews"]
    assert list(df["period"]) == ["2018", "2019"]
    assert df.loc[1, "commits"] == 60
    assert df.loc[0, "prs"] == 40


def test_summary_disabled(make_config, output_dirs):
    config = make_config(SAVE_SUMMARY=False)
    orch = make_orchestrator(config, output_dirs, activity_session(all_active(["2019"])))

    orch.run("octocat", ["2019"])

    assert not (output_dirs["base"] / "octocat_activity.csv").exists()


def test_get_results_empty_before_run(internal_config, output_dirs):
    orch = make_orchestrator(internal_config, output_dirs, activity_session({}))
    df = orch.get_results()

    assert df.empty
    assert "code_reviews" in df.columns


# ============================================================================
# Lifecycle
# ============================================================================

def test_start_logs_created_and_cleans_artifacts(internal_config, output_dirs, restore_root_logging):
    tracker = ArtifactTracker()
    leftover = output_dirs["tmp"] / "frame-x.svg"
    leftover.write_text("<svg/>")
    tracker.add(leftover)
    orch = make_orchestrator(internal_config, output_dirs,
                             activity_session(all_active(["2019"])), tracker=tracker)

    path = orch.start("octocat", ["2019"])

    log_text = (output_dirs["logs"] / "gifhub_octocat.log").read_text()
    assert f"Created: {path}" in log_text
    assert not leftover.exists()


def test_start_keeps_artifacts_when_configured(make_config, output_dirs, restore_root_logging):
    config = make_config(encoder={"keep_artifacts": True})
    tracker = ArtifactTracker()
    leftover = output_dirs["tmp"] / "frame-x.svg"
    leftover.write_text("<svg/>")
    tracker.add(leftover)
    orch = make_orchestrator(config, output_dirs,
                             activity_session(all_active(["2019"])), tracker=tracker)

    orch.start("octocat", ["2019"])

    assert leftover.exists()


def test_start_logs_failing_stage(internal_config, output_dirs, restore_root_logging):
    orch = make_orchestrator(internal_config, output_dirs, activity_session({}, extra={"from=": 500}))

    with pytest.raises(EmptyResultError):
        orch.start("octocat", ["2019"])

    log_text = (output_dirs["logs"] / "gifhub_octocat.log").read_text()
    assert "fetch stage produced no results" in log_text
