import pytest

from conftest import STAT_WITH_PAGING
from procrate.collectors import COLLECTORS, PgSwStatsCollector, ProcStatsCollector, resolve_files
from procrate.exceptions import ConfigurationError, SourceUnavailableError, ValidationError


def test_resolve_files_defaults():
    files = resolve_files({"stat": "stat", "loadavg": "loadavg"})
    assert files == {"stat": "/proc/stat", "loadavg": "/proc/loadavg"}


def test_resolve_files_overrides(tmp_path):
    files = resolve_files({"stat": "stat", "vmstat": "vmstat"},
                          {"base_path": str(tmp_path), "vmstat": "vmstat.alt"})
    assert files == {"stat": str(tmp_path / "stat"), "vmstat": str(tmp_path / "vmstat.alt")}


def test_resolve_files_without_base_path():
    files = resolve_files({"stat": "stat"}, {"base_path": None, "stat": "/tmp/stat"})
    assert files == {"stat": "/tmp/stat"}


def test_resolve_files_rejects_unknown_role():
    with pytest.raises(ConfigurationError, match="unknown file role 'meminfo'"):
        resolve_files({"stat": "stat"}, {"meminfo": "meminfo"})


def test_resolve_files_rejects_empty_name():
    with pytest.raises(ConfigurationError, match="empty file name"):
        resolve_files({"stat": "stat"}, {"stat": ""})


def test_registry():
    assert COLLECTORS == {"procstats": ProcStatsCollector, "pgswstats": PgSwStatsCollector}


def test_procstats_capture(proc_dir):
    collector = ProcStatsCollector(files={"base_path": str(proc_dir)})
    assert collector.capture() == {
        "new": 86031,
        "running": 2,
        "blocked": 1,
        "runqueue": 3,
        "count": 80,
    }
    assert collector.counters == ("new",)


def test_procstats_missing_loadavg(proc_dir):
    (proc_dir / "loadavg").unlink()
    collector = ProcStatsCollector(files={"base_path": str(proc_dir)})
    with pytest.raises(SourceUnavailableError, match="loadavg"):
        collector.capture()


def test_procstats_malformed_loadavg(proc_dir):
    (proc_dir / "loadavg").write_text("0.20 0.18 0.12\n")
    collector = ProcStatsCollector(files={"base_path": str(proc_dir)})
    with pytest.raises(ValidationError, match="unexpected content"):
        collector.capture()


def test_pgswstats_falls_back_to_vmstat(proc_dir):
    collector = PgSwStatsCollector(files={"base_path": str(proc_dir)})
    assert collector.capture() == {
        "pgpgin": 184370,
        "pgpgout": 1128468,
        "pswpin": 7,
        "pswpout": 12,
        "pgfault": 24713934,
        "pgmajfault": 1317,
    }


def test_pgswstats_prefers_stat(proc_dir):
    (proc_dir / "stat").write_text(STAT_WITH_PAGING)
    (proc_dir / "vmstat").unlink()
    collector = PgSwStatsCollector(files={"base_path": str(proc_dir)})
    # vmstat is not needed when /proc/stat carries both lines
    assert collector.capture() == {"pgpgin": 5741, "pgpgout": 1808, "pswpin": 1, "pswpout": 0}


def test_pgswstats_fallback_does_not_overwrite(proc_dir):
    (proc_dir / "stat").write_text(STAT_WITH_PAGING.replace("swap 1 0\n", ""))
    collector = PgSwStatsCollector(files={"base_path": str(proc_dir)})
    stats = collector.capture()
    assert stats["pgpgin"] == 5741
    assert stats["pgpgout"] == 1808
    assert stats["pswpout"] == 12
    assert stats["pgfault"] == 24713934


def test_pgswstats_missing_vmstat(proc_dir):
    (proc_dir / "vmstat").unlink()
    collector = PgSwStatsCollector(files={"base_path": str(proc_dir)})
    with pytest.raises(SourceUnavailableError, match="vmstat"):
        collector.capture()


def test_procstats_missing_processes_line(proc_dir):
    (proc_dir / "stat").write_text("cpu  4705 356 584 3699176\nprocs_running 2\nprocs_blocked 1\n")
    collector = ProcStatsCollector(files={"base_path": str(proc_dir)})
    with pytest.raises(ValidationError, match="no processes line"):
        collector.capture()
