#!/usr/bin/env python3
"""
Evaluate 3D object detections against ground truth.

Reads a scenario file (evaluation settings) and a frame file (ground truths
and estimations per frame), feeds every frame through the evaluation
manager in file order and prints AP / APH for the four matching modes.

Usage:
    # Evaluate with the bundled sample files
    python scripts/run_evaluation.py \
        --scenario configs/scenario.yaml --frames configs/frames.yaml

    # Also write the log to results/log/output.log
    python scripts/run_evaluation.py \
        --scenario configs/scenario.yaml --frames configs/frames.yaml \
        --result-dir results --log-level DEBUG

    # Override scenario parameters
    python scripts/run_evaluation.py \
        --scenario configs/scenario.yaml --frames configs/frames.yaml \
        --set center_distance_threshold=2.0 --set iou_3d_threshold=0.3
"""

import argparse
import sys
from pathlib import Path

import yaml

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from perception_eval.data import load_frames
from perception_eval.eval import PerceptionEvaluationConfig, PerceptionEvaluationManager
from perception_eval.objects import LabelConverter
from perception_eval.utils.logger import ProgressLogger, setup_logger


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="3D object detection evaluation (AP / APH)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scenario",
        type=str,
        required=True,
        help="Path to scenario file with the evaluation settings",
    )
    parser.add_argument(
        "--frames",
        type=str,
        required=True,
        help="Path to frame file with ground truths and estimations",
    )
    parser.add_argument(
        "--result-dir",
        type=str,
        default=None,
        help="Directory for the evaluation log (default: no log file)",
    )
    parser.add_argument(
        "--set",
        type=str,
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override an evaluation parameter, e.g. --set center_distance_threshold=2.0 (repeatable)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    return parser.parse_args(argv)


def parse_overrides(items):
    """Parse ``KEY=VALUE`` pairs, reading each value as YAML."""
    overrides = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise ValueError(f"Override must be KEY=VALUE: {item}")
        overrides[key.strip()] = yaml.safe_load(value)
    return overrides


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    logger = setup_logger(level=args.log_level)

    config = PerceptionEvaluationConfig.from_scenario(
        args.scenario,
        result_dir=args.result_dir,
        overrides=parse_overrides(args.set),
    )
    logger.info(
        f"Task: {config.evaluation_task}, labels: {[str(label) for label in config.target_labels]}"
    )

    frames = load_frames(args.frames, frame_id=config.frame_id, converter=LabelConverter(strict=False))
    manager = PerceptionEvaluationManager(config, [frame for frame, _ in frames])

    with ProgressLogger(len(frames), logger, description="Evaluating frames") as progress:
        for frame_ground_truth, estimated_objects in frames:
            manager.add_frame_result(estimated_objects, frame_ground_truth)
            progress.update()

    score = manager.get_metrics_score()
    print(score)
    return score


if __name__ == "__main__":
    main()
