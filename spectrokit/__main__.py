#!/usr/bin/env python3
"""
Spectrogram analysis of a synthesised test tone.

Usage:
    python -m spectrokit [--config CONFIG_PATH] [--tone HZ] [--set KEY=VALUE ...] [--png OUT.png]
"""

import argparse
import sys
from typing import Dict, List

import numpy as np
import yaml
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .analysis import SpectrogramConfig, SpectrogramGenerator
from .render import ColormapRegistry
from .utils.logging import setup_logging

console = Console()


def synthesize_tone(
    frequency: float,
    sample_rate: int,
    duration: float,
    n_partials: int = 1,
    noise: float = 0.0,
    seed: int = 0
) -> np.ndarray:
    """Sum of the first n_partials harmonics of frequency with 1/n amplitudes, plus optional white noise."""
    t = np.arange(int(sample_rate * duration)) / sample_rate
    y = np.zeros_like(t)
    for n in range(1, n_partials + 1):
        y += np.sin(2 * np.pi * frequency * n * t) / n
    if noise > 0:
        y += noise * np.random.default_rng(seed).standard_normal(len(t))
    return y


def parse_overrides(items: List[str]) -> Dict:
    """Turn KEY=VALUE strings into a dict, typing values with YAML rules."""
    overrides = {}
    for item in items or []:
        if '=' not in item:
            raise ValueError(f"Override must look like KEY=VALUE, got '{item}'")
        key, value = item.split('=', 1)
        overrides[key.strip()] = yaml.safe_load(value)
    return overrides


def display_report(report, config: SpectrogramConfig, console: Console):
    cfg_table = Table(title="Configuration", box=box.SIMPLE)
    cfg_table.add_column("Setting", style="cyan")
    cfg_table.add_column("Value", style="white")
    for key, value in config.to_dict().items():
        cfg_table.add_row(key, str(value))
    console.print(cfg_table)

    spec = report.spectrogram
    res_table = Table(title="Spectrogram", box=box.ROUNDED)
    res_table.add_column("Metric", style="cyan")
    res_table.add_column("Value", justify="right", style="green")
    res_table.add_row("Frames", str(spec.n_frames))
    res_table.add_row("Bins", str(spec.n_bins))
    res_table.add_row("Bin range", f"[{spec.i_min}, {spec.i_max})")
    res_table.add_row("Band peak", f"{spec.peak_db:.2f} dB")
    console.print(res_table)

    if report.pitch is not None:
        lines = [f"Fundamental: {report.pitch.fundamental:.2f} Hz"]
        if report.pitch.harmonics:
            lines.append("Harmonics: " + ", ".join(f"{h:.1f}" for h in report.pitch.harmonics))
        console.print(Panel("\n".join(lines), title="Pitch", border_style="magenta"))


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Spectrogram and pitch analysis of a test tone")
    parser.add_argument('--config', type=str, default=None, help='YAML config file')
    parser.add_argument('--set', dest='overrides', action='append', default=[],
                        metavar='KEY=VALUE', help='Override a config field (repeatable)')
    parser.add_argument('--tone', type=float, default=440.0, help='Tone frequency in Hz')
    parser.add_argument('--partials', type=int, default=1, help='Number of harmonic partials')
    parser.add_argument('--duration', type=float, default=1.0, help='Duration in seconds')
    parser.add_argument('--noise', type=float, default=0.0, help='White noise amplitude')
    parser.add_argument('--png', type=str, default=None, help='Write the rendered spectrogram here')
    parser.add_argument('--colormap', type=str, default='hot', help='matplotlib colormap name')
    parser.add_argument('--upscale', type=int, default=1, help='Integer enlargement for --png')
    parser.add_argument('--log-file', type=str, default=None)
    parser.add_argument('-v', '--verbose', action='store_true')
    args = parser.parse_args(argv)

    logger = setup_logging(verbose=args.verbose, log_file=args.log_file)

    try:
        overrides = parse_overrides(args.overrides)
        if args.config:
            config = SpectrogramConfig.from_yaml(args.config, **overrides)
        else:
            config = SpectrogramConfig.from_dict(overrides)
    except (OSError, TypeError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        return 2

    generator = SpectrogramGenerator(config)
    y = synthesize_tone(args.tone, config.sample_rate, args.duration, args.partials, args.noise)
    logger.info(f"Synthesised {len(y)} samples at {config.sample_rate} Hz ({args.tone} Hz tone)")

    report = generator.run(y)
    display_report(report, config, console)

    if args.png:
        from .utils.plot import save_image

        registry = ColormapRegistry(use_matplotlib=True)
        try:
            image = generator.render(report.spectrogram, args.colormap, registry)
        except KeyError as e:
            console.print(f"[red]{e}[/red]")
            return 2
        path = save_image(image, args.png, upscale=args.upscale)
        console.print(f"[green]Saved spectrogram image to {path}[/green]")

    return 0


if __name__ == "__main__":
    sys.exit(main())
