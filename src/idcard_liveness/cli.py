"""
Command-Line Interface
======================

Front end for generating, degrading and classifying synthetic sequences.

Usage:
    idcard-liveness generate --duration 3 --fps 15 > genuine.json
    idcard-liveness generate --spoof paper --seed 7 > paper.json
    idcard-liveness classify genuine.json
    idcard-liveness classify --report - < paper.json
    idcard-liveness evaluate --samples 100
    idcard-liveness benchmark

Exit codes:
    0 - success (classify: sequence judged live)
    1 - classify: sequence judged not live
    2 - invalid input or configuration
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

import numpy as np
from pydantic import ValidationError

from idcard_liveness.analysis.classifier import LivenessClassifier
from idcard_liveness.analysis.layered import LayeredLivenessDetector
from idcard_liveness.config import Settings, load_config, setup_logging
from idcard_liveness.models.frame import SpoofType
from idcard_liveness.models.generation import GenerationConfig, MotionPattern
from idcard_liveness.motion.generator import MotionFrameGenerator
from idcard_liveness.observability.evaluation import benchmark, evaluate_detection
from idcard_liveness.observability.report import build_verification_report
from idcard_liveness.spoof.transformer import DEFAULT_SPOOF_BASELINE, degrade


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_LIVE = 1
EXIT_INVALID = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="idcard-liveness",
        description="Synthetic ID card liveness sequences and rule-based classification",
    )
    parser.add_argument("--config", type=str, default=None, help="Path to liveness.yaml")
    parser.add_argument("--seed", type=int, default=None, help="Seed for tremor amplitudes")
    parser.add_argument("--log-level", type=str, default=None, help="Override log level")

    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Emit a frame sequence as JSON")
    gen.add_argument("--duration", type=float, default=None, help="Duration in seconds")
    gen.add_argument("--fps", type=float, default=None, help="Frames per second")
    gen.add_argument(
        "--pattern",
        choices=[p.value for p in MotionPattern],
        default=None,
        help="Motion pattern",
    )
    gen.add_argument("--no-hologram", action="store_true", help="Disable hologram model")
    gen.add_argument("--no-noise", action="store_true", help="Disable hand tremor")
    gen.add_argument(
        "--spoof",
        choices=[s.value for s in SpoofType],
        default=None,
        help=(
            "Degrade the default spoof baseline (hologram off) with this medium; "
            "cannot be combined with --no-hologram"
        ),
    )

    cls = sub.add_parser("classify", help="Classify a JSON frame sequence")
    cls.add_argument("input", help="JSON file with a list of frames, or '-' for stdin")
    mode = cls.add_mutually_exclusive_group()
    mode.add_argument("--report", action="store_true", help="Print the verification report")
    mode.add_argument("--layered", action="store_true", help="Use the layered detector")

    ev = sub.add_parser("evaluate", help="Detection rates over synthetic samples")
    ev.add_argument("--samples", type=int, default=100, help="Samples per scenario")
    ev.add_argument(
        "--spoof",
        action="append",
        choices=[s.value for s in SpoofType],
        default=None,
        help="Spoof media to evaluate (repeatable, default: paper and screen)",
    )

    sub.add_parser("benchmark", help="Time generation and classification")

    return parser


def _emit(payload) -> None:
    print(json.dumps(payload, indent=2))


def _run_generate(args: argparse.Namespace, settings: Settings, rng: np.random.Generator) -> int:
    overrides = {}
    if args.duration is not None:
        overrides["duration_seconds"] = args.duration
    if args.fps is not None:
        overrides["frames_per_second"] = args.fps
    if args.pattern is not None:
        overrides["motion_pattern"] = args.pattern
    if args.no_noise:
        overrides["include_noise"] = False

    if args.spoof and args.no_hologram:
        raise ValueError(
            "--no-hologram cannot be combined with --spoof "
            "(the spoof baseline has no hologram)"
        )

    if args.spoof:
        base = DEFAULT_SPOOF_BASELINE.model_dump()
    else:
        base = settings.generator.to_generation_config().model_dump()
        if args.no_hologram:
            overrides["include_hologram"] = False

    config = GenerationConfig.model_validate({**base, **overrides})
    frames = MotionFrameGenerator(rng=rng).generate(config)
    if args.spoof:
        frames = degrade(frames, args.spoof)

    _emit([frame.to_payload() for frame in frames])
    return EXIT_OK


def _read_frames(source: str) -> list:
    if source == "-":
        data = json.load(sys.stdin)
    else:
        with open(source, "r") as f:
            data = json.load(f)
    if not isinstance(data, list):
        raise ValueError("Expected a JSON list of frames")
    return data


def _run_classify(args: argparse.Namespace, settings: Settings) -> int:
    frames = _read_frames(args.input)

    if args.layered:
        detector = LayeredLivenessDetector(settings.layered.to_layer_thresholds())
        verdict = detector.evaluate(frames)
        _emit(verdict.model_dump(mode="json", by_alias=True))
        return EXIT_OK if verdict.is_authentic else EXIT_NOT_LIVE

    thresholds = settings.classifier.to_scoring_thresholds()
    result = LivenessClassifier(thresholds).classify(frames)

    if args.report:
        report = build_verification_report(
            result,
            thresholds=thresholds,
            review_window=settings.report.to_review_window(),
        )
        _emit(report.to_payload())
    else:
        _emit(result.to_payload())

    return EXIT_OK if result.is_live else EXIT_NOT_LIVE


def _run_evaluate(args: argparse.Namespace, settings: Settings, rng: np.random.Generator) -> int:
    spoof_types = args.spoof or [SpoofType.PAPER.value, SpoofType.SCREEN.value]

    report = evaluate_detection(
        samples=args.samples,
        spoof_types=[SpoofType(s) for s in spoof_types],
        rng=rng,
        classifier=LivenessClassifier(settings.classifier.to_scoring_thresholds()),
        genuine_config=settings.generator.to_generation_config(),
    )
    _emit(report.to_dict())
    return EXIT_OK


def _run_benchmark(settings: Settings, rng: np.random.Generator) -> int:
    results = benchmark(
        rng=rng,
        classifier=LivenessClassifier(settings.classifier.to_scoring_thresholds()),
    )
    _emit([r.to_dict() for r in results])
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_config(args.config)
        if args.log_level:
            settings.logging.level = args.log_level
        setup_logging(settings)

        seed = args.seed if args.seed is not None else settings.generator.seed
        rng = np.random.default_rng(seed)

        if args.command == "generate":
            return _run_generate(args, settings, rng)
        if args.command == "classify":
            return _run_classify(args, settings)
        if args.command == "evaluate":
            return _run_evaluate(args, settings, rng)
        return _run_benchmark(settings, rng)

    except (ValidationError, ValueError, OSError) as e:
        logger.debug("Invalid input", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
