import argparse
import logging
import os
import sys
from datetime import datetime
from typing import Optional, Sequence, TextIO

from jobshop.checks import verify
from jobshop.config import RunConfig, load_config
from jobshop.generator import generate_taillard_instance
from jobshop.heuristics import HEURISTICS, get_heuristic
from jobshop.models import DataInstance
from jobshop.parser import load_instance
from jobshop.report import AnsiColor, NoColor, gantt_chart, summary
from jobshop.scheduler import schedule_instance

logger = logging.getLogger("jssp.cli")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Job shop stage-dispatch scheduler")
    parser.add_argument("instance", nargs="?", default=None, help="Instance file path")
    parser.add_argument("--config", default=None, help="YAML/JSON config file")
    parser.add_argument("--heuristic", choices=sorted(HEURISTICS), default=None)
    parser.add_argument(
        "--no-color", dest="color", action="store_const", const=False, default=None,
        help="Disable ANSI colours in the text chart",
    )
    parser.add_argument(
        "--no-verify", dest="verify", action="store_const", const=False, default=None,
        help="Skip feasibility checks of the finished schedule",
    )
    parser.add_argument("--gantt", default=None, help="Gantt image file name or path")
    parser.add_argument("--charts-dir", dest="charts_dir", default=None)
    parser.add_argument("--log-level", dest="log_level", default=None)
    parser.add_argument(
        "--compare", action="store_true", help="Run every registered heuristic and compare makespans"
    )
    parser.add_argument(
        "--random", nargs=2, type=int, metavar=("JOBS", "MACHINES"), default=None,
        help="Schedule a random instance instead of reading a file",
    )
    parser.add_argument(
        "--machine-base", dest="machine_base", type=int, choices=(0, 1), default=None,
        help="Machine id base used in the instance file (detected when omitted)",
    )
    parser.add_argument("--seed", type=int, default=0)
    return parser


def resolve_config(args: argparse.Namespace) -> RunConfig:
    cfg = load_config(args.config) if args.config else RunConfig()
    return cfg.merged(
        instance=args.instance,
        heuristic=args.heuristic,
        color=args.color,
        verify=args.verify,
        gantt=args.gantt,
        machine_base=args.machine_base,
        charts_dir=args.charts_dir,
        log_level=args.log_level.upper() if args.log_level else None,
    )


def run_compare(data: DataInstance) -> dict[str, int]:
    """Schedule ``data`` once per registered heuristic; return makespans by name."""
    results: dict[str, int] = {}
    for name, heuristic in HEURISTICS.items():
        data.reset()
        scheduler = schedule_instance(data, heuristic)
        results[name] = scheduler.makespan()
        logger.info("compare heuristic=%s cmax=%d", name, results[name])
    data.reset()
    return results


def run_single(data: DataInstance, cfg: RunConfig, out: Optional[TextIO] = None) -> int:
    out = out or sys.stdout
    scheduler = schedule_instance(data, get_heuristic(cfg.heuristic))
    if cfg.verify:
        verify(scheduler)
        logger.info("Schedule verified: no overlaps, job order preserved")

    colors = AnsiColor() if cfg.color else NoColor()
    out.write(gantt_chart(scheduler, colors) + "\n")
    out.write(summary(scheduler) + "\n")

    path = cfg.gantt_path
    if path:
        from jobshop.visualization import plot_gantt

        plot_gantt(
            scheduler.to_schedule(),
            save_path=path,
            title=f"{cfg.heuristic} - Cmax = {scheduler.makespan()}",
        )
        logger.info("Saved Gantt chart to %s", path)
    return scheduler.makespan()


def main(argv: Optional[Sequence[str]] = None, out: Optional[TextIO] = None) -> int:
    out = out or sys.stdout
    args = build_arg_parser().parse_args(argv)
    cfg = resolve_config(args)

    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.random:
        jobs, machines = args.random
        data = generate_taillard_instance(jobs, machines, seed=args.seed)
        label = f"random_{jobs}x{machines}_s{args.seed}"
    else:
        data = load_instance(cfg.instance, machine_base=cfg.machine_base)
        label = os.path.basename(cfg.instance)
    logger.info(
        "Instance: %s jobs=%d machines=%d ops=%d",
        label,
        data.jobs_number,
        data.machines_number,
        data.operations_number,
    )

    if args.compare:
        results = run_compare(data)
        width = max(len(name) for name in results)
        for name, cmax in sorted(results.items(), key=lambda kv: (kv[1], kv[0])):
            out.write(f"{name:<{width}}  {cmax}\n")
        return 0

    started = datetime.now()
    cmax = run_single(data, cfg, out=out)
    logger.info("Done in %.3fs, cmax=%d", (datetime.now() - started).total_seconds(), cmax)
    return 0
