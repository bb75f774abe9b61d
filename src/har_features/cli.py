"""
Command line entry point.

Examples:
    har-features extract recording.csv --output features.csv
    har-features classify recording.csv --model trained_models/har_model.pkl
    har-features live http://192.168.0.36:8080 --export-dir recordings
"""

import argparse
import logging
import os
import sys
import time

from tabulate import tabulate

from har_features.classifier import MODEL_PATH
from har_features.config import DEFAULT_CONFIG, PipelineConfig
from har_features.data_loader import iter_raw_samples, load_recording
from har_features.exceptions import BufferFullError, ConfigurationError, ExportError
from har_features.pipeline import build_feature_dataset
from har_features.processor import HarProcessor
from har_features.rate_monitor import SampleRateMonitor
from har_features.recorder import RecordingBuffer, export_csv

LOGGER = logging.getLogger(__name__)


def _add_config_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--sample-rate", type=float, default=None,
                        help=f"sampling rate in Hz (default {DEFAULT_CONFIG.sample_rate_hz})")
    parser.add_argument("--window-duration", type=float, default=None,
                        help=f"window length in seconds (default {DEFAULT_CONFIG.window_duration_s})")
    parser.add_argument("--overlap", type=float, default=None,
                        help=f"overlap ratio between windows (default {DEFAULT_CONFIG.overlap_ratio})")
    parser.add_argument("--alpha", type=float, default=None,
                        help=f"gravity filter smoothing constant (default {DEFAULT_CONFIG.alpha})")
    parser.add_argument("--dim", type=int, default=None,
                        help=f"feature vector length (default {DEFAULT_CONFIG.feature_dim})")


def config_from_args(args: argparse.Namespace) -> PipelineConfig:
    return DEFAULT_CONFIG.with_overrides(
        sample_rate_hz=args.sample_rate,
        window_duration_s=args.window_duration,
        overlap_ratio=args.overlap,
        alpha=args.alpha,
        feature_dim=args.dim,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="har-features",
        description="UCI-HAR style feature extraction from accelerometer/gyroscope streams",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_extract = sub.add_parser("extract", help="recording CSV -> feature CSV (one row per window)")
    p_extract.add_argument("recording")
    p_extract.add_argument("--output", "-o", required=True)
    _add_config_args(p_extract)

    p_classify = sub.add_parser("classify", help="print the predicted activity of every window")
    p_classify.add_argument("recording")
    p_classify.add_argument("--model", default=MODEL_PATH,
                            help="joblib model file; rule-based fallback if missing")
    _add_config_args(p_classify)

    p_live = sub.add_parser("live", help="classify a phyphox stream in real time")
    p_live.add_argument("url", help="phyphox remote access URL, e.g. http://192.168.0.36:8080")
    p_live.add_argument("--model", default=MODEL_PATH)
    p_live.add_argument("--export-dir", default=None,
                        help="write the recorded raw samples here on exit")
    p_live.add_argument("--capacity", type=int, default=360_000,
                        help="max recorded samples kept before export (default 2 h at 50 Hz)")
    _add_config_args(p_live)

    return parser


def cmd_extract(args, config: PipelineConfig) -> int:
    df = load_recording(args.recording)
    feature_df = build_feature_dataset(df, config)
    out_dir = os.path.dirname(os.path.abspath(args.output))
    os.makedirs(out_dir, exist_ok=True)
    feature_df.to_csv(args.output, index=False)
    print(f"Wrote {len(feature_df)} windows x {config.feature_dim} features to {args.output}")
    return 0


def cmd_classify(args, config: PipelineConfig) -> int:
    df = load_recording(args.recording)
    processor = HarProcessor(config, model_path=args.model)

    rows = []
    for raw in iter_raw_samples(df):
        prediction = processor.process(raw)
        if prediction is None:
            continue
        start = processor.pipeline.last_window_start
        rows.append([
            processor.windows_emitted - 1,
            start,
            f"{start / config.sample_rate_hz:.2f}",
            prediction.label,
            f"{prediction.confidence:.3f}",
            prediction.source,
        ])

    if not rows:
        print(f"Recording has {len(df)} samples; need {config.window_size} for one window.")
        return 1

    print(tabulate(
        rows,
        headers=["Window", "Start sample", "Start (s)", "Activity", "Confidence", "Source"],
        tablefmt="pretty",
    ))
    return 0


def cmd_live(args, config: PipelineConfig) -> int:
    # imported here so extract/classify do not need network libraries at startup
    from har_features.acquisition import PhyphoxPoller

    processor = HarProcessor(config, model_path=args.model)
    recording = RecordingBuffer(args.capacity)
    rate = SampleRateMonitor()

    def on_sample(raw):
        now_ns = time.time_ns()
        rate.update(now_ns)
        prediction = processor.process(raw)
        if prediction is not None:
            print(f"[{rate.rate_hz:5.1f} Hz] {prediction}")
        try:
            recording.record(now_ns // 1_000_000, raw, processor.current_label)
        except BufferFullError:
            LOGGER.warning("Recording buffer full, stopping capture")
            poller.stop()

    poller = PhyphoxPoller(args.url, on_sample, on_error=lambda msg: print(msg, file=sys.stderr))
    poller.start()
    print("Collecting data. Press Ctrl+C to stop.")
    try:
        while poller.is_alive():
            poller.join(timeout=0.5)
    except KeyboardInterrupt:
        pass
    finally:
        poller.stop()
        poller.join(timeout=5.0)

    if args.export_dir is not None:
        try:
            path = export_csv(recording.flush(), args.export_dir)
        except ExportError as e:
            print(f"Export failed: {e}", file=sys.stderr)
            return 1
        print(f"Saved recording to {path}")
    return 0


COMMANDS = {
    "extract": cmd_extract,
    "classify": cmd_classify,
    "live": cmd_live,
}


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        config = config_from_args(args)
    except ConfigurationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2
    return COMMANDS[args.command](args, config)


if __name__ == "__main__":
    sys.exit(main())
