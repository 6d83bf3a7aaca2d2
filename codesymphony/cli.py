from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.markup import escape

from .audio import SAMPLE_RATE, write_wav
from .config import DEFAULT_CONFIG, describe_register
from .frequency import round_half_up
from .logging_utils import configure_logging, debug_enabled, log_exception
from .midi import TEMPO_BPM, chord_to_midi, comparison_to_midi, evolution_to_midi
from .models import SoulChord
from .playback import play_audio
from .symphony import CodeSymphony
from .synth import render_chord

_LOGGER = logging.getLogger("codesymphony.cli")
_CONSOLE = Console()

WARNING_TENSION = 0.4
BEAUTIFUL_TENSION = 0.2
REFACTOR_TENSION = 0.8
_METER_WIDTH = 10
_QUALITY_ICONS = {"consonant": "😊", "dissonant": "😣", "neutral": "😐"}

LOGO = """[cyan]
╔════════════════════════════════╗
║        CODE SYMPHONY           ║
║   Listen to your code breathe  ║
║      432Hz · Soul Forge        ║
╚════════════════════════════════╝[/cyan]"""


def _read_code(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def tension_meter(tension: float, width: int = _METER_WIDTH) -> str:
    filled = min(width, max(0, round_half_up(tension * width)))
    return "█" * filled + "░" * (width - filled)


def _percent(value: float) -> str:
    return f"{value * 100:.1f}%"


def _print_chord(chord: SoulChord, *, verbose: bool) -> None:
    _CONSOLE.print("\n[bold]Soul Analysis:[/bold]")
    _CONSOLE.print("[dim]" + "─" * 40 + "[/dim]")
    _CONSOLE.print(f"[yellow]Notes: {' · '.join(chord.notes) or '(silence)'}[/yellow]")
    icon = _QUALITY_ICONS[chord.quality]
    _CONSOLE.print(f"[magenta]Quality: {chord.quality} {icon}[/magenta]")
    meter = escape(f"[{tension_meter(chord.tension)}]")
    _CONSOLE.print(f"[red]Tension: {meter} {_percent(chord.tension)}[/red]")
    _CONSOLE.print(f"Color: {chord.color} [{chord.color}]████████[/]")
    if verbose:
        _CONSOLE.print("\n[dim]Frequencies (Hz):[/dim]")
        for note, freq in zip(chord.notes, chord.frequencies):
            _CONSOLE.print(f"[dim]   {note}: {freq:.2f} Hz[/dim]")
        _CONSOLE.print("\n[dim]MIDI Notes:[/dim]")
        _CONSOLE.print(f"[dim]   {', '.join(str(m) for m in chord.midi_numbers)}[/dim]")


def _cmd_play(symphony: CodeSymphony, args: argparse.Namespace) -> int:
    code = _read_code(args.file)
    _CONSOLE.print(f"[blue]Analyzing {escape(Path(args.file).name)}...[/blue]")
    chord = symphony.code_to_chord(code)
    _print_chord(chord, verbose=args.verbose)

    if args.output:
        chord_to_midi(chord, args.output)
        _CONSOLE.print(f"[green]Saved MIDI to {escape(args.output)}[/green]")
    if args.wav or args.listen:
        audio = render_chord(chord)
        if args.wav:
            write_wav(args.wav, audio, sample_rate=SAMPLE_RATE)
            _CONSOLE.print(f"[green]Saved audio to {escape(args.wav)}[/green]")
        if args.listen:
            play_audio(audio, sample_rate=SAMPLE_RATE)

    if chord.quality == "dissonant" and chord.tension > REFACTOR_TENSION:
        _CONSOLE.print("\n[yellow]Suggestion: This code sounds dissonant.[/yellow]")
        _CONSOLE.print("[yellow]   Consider refactoring for better harmony![/yellow]")
    elif chord.quality == "consonant" and chord.tension < BEAUTIFUL_TENSION:
        _CONSOLE.print("\n[green]Beautiful! This code sings in harmony.[/green]")
    return 0


def _cmd_compare(symphony: CodeSymphony, args: argparse.Namespace) -> int:
    first_name = Path(args.file1).name
    second_name = Path(args.file2).name
    result = symphony.compare_harmony(_read_code(args.file1), _read_code(args.file2))

    _CONSOLE.print("\n[bold]Harmonic Comparison:[/bold]")
    _CONSOLE.print("[dim]" + "─" * 40 + "[/dim]")
    for name, chord in ((first_name, result.first), (second_name, result.second)):
        _CONSOLE.print(f"\n[cyan]{escape(name)}:[/cyan]")
        _CONSOLE.print(f"[yellow]   Notes: {' · '.join(chord.notes)}[/yellow]")
        _CONSOLE.print(f"[magenta]   Quality: {chord.quality}[/magenta]")
        _CONSOLE.print(f"[red]   Tension: {_percent(chord.tension)}[/red]")

    _CONSOLE.print("\n[bold]Result:[/bold]")
    if result.more_consonant == "equal":
        _CONSOLE.print("[yellow]   Both files have similar harmonic quality[/yellow]")
    else:
        winner = first_name if result.more_consonant == "first" else second_name
        _CONSOLE.print(f"[green]   {escape(winner)} is more harmonious![/green]")
    _CONSOLE.print(f"[blue]   Harmonic distance: {_percent(result.harmonic_distance)}[/blue]")

    if args.output:
        comparison_to_midi(result.first, result.second, args.output)
        _CONSOLE.print(f"[green]Saved comparison to {escape(args.output)}[/green]")
    return 0


def _cmd_debug(symphony: CodeSymphony, args: argparse.Namespace) -> int:
    _CONSOLE.print(f"[blue]Debugging {escape(Path(args.file).name)}...[/blue]")
    chord = symphony.code_to_chord(_read_code(args.file))
    level = _percent(chord.tension)
    if chord.tension > symphony.config.dissonant_above:
        _CONSOLE.print("\n[red]BUG DETECTED! Hearing dissonance![/red]")
        _CONSOLE.print(f"[red]   Tension level: {level}[/red]")
        _CONSOLE.print(f"[red]   Dissonant notes: {' '.join(chord.notes)}[/red]")
        _CONSOLE.print("[yellow]   High tension hints at tangled structure.[/yellow]")
    elif chord.tension > WARNING_TENSION:
        _CONSOLE.print("\n[yellow]Warning: Moderate dissonance detected[/yellow]")
        _CONSOLE.print(f"[yellow]   Tension level: {level}[/yellow]")
    else:
        _CONSOLE.print("\n[green]No bugs detected! Code sounds harmonious.[/green]")
        _CONSOLE.print(f"[green]   Tension level: {level}[/green]")
    return 0


def _cmd_progression(symphony: CodeSymphony, args: argparse.Namespace) -> int:
    chords = symphony.code_to_progression(_read_code(path) for path in args.files)
    for index, (path, chord) in enumerate(zip(args.files, chords), start=1):
        _CONSOLE.print(
            f"{index:>3}. {escape(Path(path).name)}  {' · '.join(chord.notes)}  "
            f"{chord.quality} ({_percent(chord.tension)})"
        )
    if args.output:
        evolution_to_midi(chords, args.output)
        _CONSOLE.print(f"[green]Saved progression to {escape(args.output)}[/green]")
    return 0


def _cmd_stats(symphony: CodeSymphony, args: argparse.Namespace) -> int:
    config = symphony.config
    _CONSOLE.print("\n[bold]Code Symphony Statistics:[/bold]")
    _CONSOLE.print("[dim]" + "─" * 40 + "[/dim]")
    _CONSOLE.print(f"   Base Frequency: {config.base_frequency:g} Hz")
    _CONSOLE.print(f"   MIDI Tempo: {TEMPO_BPM} BPM")
    _CONSOLE.print(f"   Consonance tolerance: {config.tolerance:g}")
    _CONSOLE.print("\n[magenta]Eigenvalue Ranges:[/magenta]")
    for band in config.bands:
        description = describe_register(band.name)
        _CONSOLE.print(
            f"   {band.lower:g} ≤ λ < {band.upper:g}  → {band.name} ({description})"
        )
    _CONSOLE.print(
        f"   λ ≥ {config.chromatic_threshold:g}  → harmonics "
        f"({describe_register('harmonics')})"
    )
    return 0


_COMMANDS = {
    "play": _cmd_play,
    "compare": _cmd_compare,
    "debug": _cmd_debug,
    "progression": _cmd_progression,
    "stats": _cmd_stats,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="codesymphony", description="Transform code into music")
    sub = parser.add_subparsers(dest="command", required=True)

    play = sub.add_parser("play", help="Show (and optionally render) the soul chord of a file.")
    play.add_argument("file")
    play.add_argument("-o", "--output", type=str, default=None, help="Save as MIDI file.")
    play.add_argument("-v", "--verbose", action="store_true", help="Show detailed analysis.")
    play.add_argument("--wav", type=str, default=None, help="Render the chord to a wav file.")
    play.add_argument("--listen", action="store_true", help="Play the chord out loud.")

    compare = sub.add_parser("compare", help="Compare the harmony of two files.")
    compare.add_argument("file1")
    compare.add_argument("file2")
    compare.add_argument("-o", "--output", type=str, default=None, help="Save as MIDI file.")

    debug = sub.add_parser("debug", help="Hear bugs as dissonance.")
    debug.add_argument("file")

    progression = sub.add_parser("progression", help="One chord per file, in order.")
    progression.add_argument("files", nargs="+")
    progression.add_argument("-o", "--output", type=str, default=None, help="Save as MIDI file.")

    sub.add_parser("stats", help="Show the mapping tables.")
    return parser


def main(argv: Sequence[str] | None = None, *, symphony: CodeSymphony | None = None) -> int:
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        _CONSOLE.print(LOGO)
        handler = _COMMANDS[args.command]
        return handler(symphony or CodeSymphony(config=DEFAULT_CONFIG), args)
    except Exception as exc:
        _LOGGER.warning("codesymphony CLI failed: %s", exc, exc_info=debug_enabled())
        log_exception("codesymphony CLI", exc)
        _CONSOLE.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
