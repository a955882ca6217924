import os

from experiments.run_experiments import (
    ROOT, apply_overrides, load_cfg, print_queue_report, print_waitlist_report,
    queue_kwargs, run_queue_scenarios, run_waitlist_scenarios, select_scenarios,
    waitlist_kwargs,
)
from experiments.scenarios import QUEUE_SCENARIOS, STAFF_SHORTAGE, WAITLIST_SCENARIOS


def test_load_cfg_reads_baseline_yaml():
    cfg = load_cfg()
    assert cfg["queue"]["staff_count"] == 10
    assert cfg["queue"]["day_minutes"] == 540
    assert cfg["waitlist"]["runs"] == 5000
    assert cfg["waitlist"]["shortage"] is None
    assert os.path.exists(os.path.join(ROOT, "config", "baseline.yaml"))


def test_apply_overrides_merges_without_mutating():
    cfg = load_cfg()
    merged = apply_overrides(cfg, STAFF_SHORTAGE["overrides"])
    assert merged["waitlist"]["shortage"] == {"start_day": 30, "length_days": 14, "capacity_factor": 0.3}
    assert merged["waitlist"]["daily_capacity"] == 2.0
    assert cfg["waitlist"]["shortage"] is None


def test_engine_kwargs_from_config():
    cfg = apply_overrides(load_cfg(), {"sim": {"seed": 4, "workers": 2}})
    q = queue_kwargs(cfg)
    assert q["staff_count"] == 10 and q["runs"] == 1000
    assert (q["seed"], q["workers"]) == (4, 2)
    w = waitlist_kwargs(cfg)
    assert w["daily_inquiries"] == 2.8 and w["horizon_days"] == 90
    assert "day_minutes" not in w


def test_presets_match_named_scenarios():
    cfg = load_cfg()
    params = {
        sc["label"]: apply_overrides(cfg, sc["overrides"])["queue"] for sc in QUEUE_SCENARIOS
    }
    assert params["Increased Staff"]["staff_count"] == 20
    assert params["Reduced Intake"]["arrival_rate_per_hour"] == 10
    assert params["High Demand"]["arrival_rate_per_hour"] == 25
    assert params["Understaffed Shift"]["staff_count"] == 5
    assert params["Faster Counselling"]["mean_service_time"] == 45
    assert [sc["name"] for sc in WAITLIST_SCENARIOS] == ["baseline", "hire_therapist", "crisis", "staff_shortage"]


def test_small_run_and_reports(capsys):
    cfg = apply_overrides(load_cfg(), {"queue": {"runs": 5}, "waitlist": {"runs": 50}})
    q = run_queue_scenarios(cfg, QUEUE_SCENARIOS[:2])
    w = run_waitlist_scenarios(cfg, WAITLIST_SCENARIOS)
    assert [s.runs for _, s in q] == [5, 5]
    assert [s.runs for _, s in w] == [50, 50, 50, 50]

    print_queue_report(q)
    print_waitlist_report(w, 90)
    out = capsys.readouterr().out
    assert "Queue scenario: Baseline" in out
    assert "Queue scenario: Increased Staff" in out
    assert "Waitlist scenario: Staff Shortage (Sick Leave)" in out
    assert "95% interval" in out


def test_config_lists_every_preset():
    exp = load_cfg()["experiments"]
    assert exp["queue_presets"] == [sc["name"] for sc in QUEUE_SCENARIOS]
    assert exp["waitlist_presets"] == [sc["name"] for sc in WAITLIST_SCENARIOS]


def test_select_scenarios_keeps_order_and_warns_on_unknown(capsys):
    picked = select_scenarios(QUEUE_SCENARIOS, ["high_demand", "night_shift", "baseline"])
    assert [sc["name"] for sc in picked] == ["high_demand", "baseline"]
    out = capsys.readouterr().out
    assert "[warn] unknown scenario: night_shift" in out
    assert "high_demand" not in out


def test_select_scenarios_without_names_runs_all(capsys):
    assert select_scenarios(WAITLIST_SCENARIOS, None) == WAITLIST_SCENARIOS
    assert select_scenarios(WAITLIST_SCENARIOS, []) == []
    assert capsys.readouterr().out == ""
