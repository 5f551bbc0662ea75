import pytest


class FakeSource:
    """Source returning queued snapshots, one per capture()."""

    def __init__(self, *snapshots, counters=None):
        self.snapshots = list(snapshots)
        self.captures = 0
        if counters is not None:
            self.counters = counters

    def capture(self):
        self.captures += 1
        if len(self.snapshots) > 1:
            return dict(self.snapshots.pop(0))
        return dict(self.snapshots[0])


class FakeClock:
    """Clock returning queued timestamps, repeating the last one."""

    def __init__(self, *times):
        self.times = list(times)

    def __call__(self):
        if len(self.times) > 1:
            return self.times.pop(0)
        return self.times[0]


STAT = """\
cpu  4705 356 584 3699176 23060 0 277 0 0 0
cpu0 1393280 32966 572056 13343292 6130 0 17875 0 0 0
intr 1462898 0 0 0 0
ctxt 115315
btime 769041601
processes 86031
procs_running 2
procs_blocked 1
softirq 229245889 94 60001584 13619 5175704 2471304 28 51212741 59130143 0 51240672
"""

STAT_WITH_PAGING = STAT + "page 5741 1808\nswap 1 0\n"

VMSTAT = """\
nr_free_pages 1416577
pgpgin 184370
pgpgout 1128468
pswpin 7
pswpout 12
pgalloc_dma 0
pgfault 24713934
pgmajfault 1317
"""

LOADAVG = "0.20 0.18 0.12 3/80 11206\n"


@pytest.fixture
def proc_dir(tmp_path):
    """Fake proc tree with stat, vmstat and loadavg."""
    root = tmp_path / "proc"
    root.mkdir()
    (root / "stat").write_text(STAT)
    (root / "vmstat").write_text(VMSTAT)
    (root / "loadavg").write_text(LOADAVG)
    return root
