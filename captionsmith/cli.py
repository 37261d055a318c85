"""Click CLI for CaptionSmith — show, convert, edit, clip, narrate, voices."""

import dataclasses
import sys
from pathlib import Path

import click

from captionsmith.log import setup_logging, get_logger
from captionsmith.exceptions import CaptionSmithError, InputError

logger = get_logger(__name__)

FORMAT_CHOICES = click.Choice(['srt', 'vtt', 'txt'], case_sensitive=False)


def _load_store(caption_file):
    from captionsmith.input_handler import InputHandler
    from captionsmith.store import CaptionStore

    path = Path(caption_file)
    InputHandler().validate_caption_file(path)
    store = CaptionStore()
    store.import_file(path)
    return store


def _selected_indices(store, indices):
    """Convert 1-based CLI entry numbers to store indices; all entries when none given."""
    if not indices:
        return list(range(len(store)))
    return [n - 1 for n in indices]


def _default_output(caption_file, filename):
    """Place *filename* beside the input, never on top of it."""
    source = Path(caption_file)
    out_path = source.with_name(filename)
    if out_path.resolve() == source.resolve():
        raise InputError(f"Refusing to overwrite {source}; pass -o to choose an output file")
    return out_path


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging.')
def cli(verbose):
    """CaptionSmith — caption editing, conversion and narration toolkit."""
    setup_logging('DEBUG' if verbose else 'INFO')


@cli.command()
@click.argument('caption_file', type=click.Path(exists=True))
def show(caption_file):
    """List the entries of a caption file."""
    try:
        store = _load_store(caption_file)
        click.echo(f"{store.source_name} ({store.format.value}, {len(store)} entries)")
        for n, entry in enumerate(store.entries, 1):
            click.echo(f"{n:>4}  {entry.start_time} --> {entry.end_time}")
            for line in entry.text.split('\n'):
                click.echo(f"      {line}")
    except CaptionSmithError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)


@cli.command()
@click.argument('caption_file', type=click.Path(exists=True))
@click.option('--to', '-t', 'target', required=True, type=FORMAT_CHOICES, help='Output format.')
@click.option('--output', '-o', default=None, type=click.Path(), help='Output file path.')
def convert(caption_file, target, output):
    """Convert a caption file to another format."""
    from captionsmith.generators import write_caption_file

    try:
        store = _load_store(caption_file)
        store.set_format(target)
        filename, _mime, _content = store.export()
        out_path = Path(output) if output else _default_output(caption_file, filename)
        write_caption_file(store.entries, out_path, fmt=store.format)
        click.echo(f"Converted {len(store)} entries -> {out_path}")
    except CaptionSmithError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)


@cli.command()
@click.argument('caption_file', type=click.Path(exists=True))
@click.argument('number', type=int)
@click.option('--start', default=None, help='New start timestamp.')
@click.option('--end', default=None, help='New end timestamp.')
@click.option('--text', default=None, help='New caption text (use \\n for line breaks).')
@click.option('--output', '-o', default=None, type=click.Path(),
              help='Output file (default: <source>.edited.<format> beside the input).')
def edit(caption_file, number, start, end, text, output):
    """Replace the timing or text of entry NUMBER (1-based)."""
    from captionsmith.generators import export_filename, write_caption_file

    try:
        store = _load_store(caption_file)
        index = number - 1
        current = store[index]
        changes = {}
        if start is not None:
            changes['start_time'] = start
        if end is not None:
            changes['end_time'] = end
        if text is not None:
            changes['text'] = text.replace('\\n', '\n')
        store.update_entry(index, dataclasses.replace(current, **changes))

        if output:
            out_path = Path(output)
        else:
            filename = export_filename(f"{store.source_name}.edited", store.format)
            out_path = _default_output(caption_file, filename)
        write_caption_file(store.entries, out_path, fmt=store.format)
        click.echo(f"Updated entry {number} -> {out_path}")
    except CaptionSmithError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)


@cli.command()
@click.argument('caption_file', type=click.Path(exists=True))
@click.argument('audio', type=click.Path(exists=True))
@click.option('--index', '-i', 'indices', multiple=True, type=int,
              help='Entry number to clip (1-based, repeatable). Default: all entries.')
@click.option('--output-dir', '-o', default=None, type=click.Path(), help='Output directory.')
def clip(caption_file, audio, indices, output_dir):
    """Cut the audio under each caption into its own WAV file."""
    from captionsmith.audio_io import decode_audio
    from captionsmith.input_handler import InputHandler
    from captionsmith.progress import ProgressTracker
    from captionsmith.slicer import write_clip

    handler = InputHandler()
    try:
        handler.validate_audio_file(Path(audio))
        handler.validate_audio_format(Path(audio))
        store = _load_store(caption_file)
        selected = _selected_indices(store, indices)
        names = [store.clip_filename(index) for index in selected]

        store.load_audio(decode_audio(Path(audio)))
        out_dir = Path(output_dir) if output_dir else Path(caption_file).parent / f'{store.source_name}_clips'
        handler.prepare_output_dir(out_dir)

        with ProgressTracker(len(selected), description='Clipping') as progress:
            for index, name in zip(selected, names):
                write_clip(store.clip(index), out_dir / name, clamp=store.config.clamp_samples)
                progress.advance(name)

        click.echo(f"Wrote {len(selected)} clips -> {out_dir}")
    except CaptionSmithError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)


@cli.command()
@click.argument('caption_file', type=click.Path(exists=True))
@click.option('--model', '-m', 'model_path', required=True, type=click.Path(exists=True),
              help='Piper .onnx voice model.')
@click.option('--index', '-i', 'indices', multiple=True, type=int,
              help='Entry number to narrate (1-based, repeatable). Default: all entries.')
@click.option('--output-dir', '-o', default=None, type=click.Path(), help='Output directory.')
def narrate(caption_file, model_path, indices, output_dir):
    """Synthesize speech for caption entries with Piper."""
    from captionsmith.input_handler import InputHandler
    from captionsmith.narration import PiperNarrator
    from captionsmith.progress import ProgressTracker
    from captionsmith.slicer import write_wav

    narrator = PiperNarrator(voice=Path(model_path).stem, model_path=Path(model_path))
    try:
        store = _load_store(caption_file)
        selected = _selected_indices(store, indices)
        names = [store.clip_filename(index) for index in selected]
        out_dir = Path(output_dir) if output_dir else Path(caption_file).parent / f'{store.source_name}_narration'
        InputHandler().prepare_output_dir(out_dir)

        with ProgressTracker(len(selected), description='Narrating') as progress:
            for index, name in zip(selected, names):
                buffer = narrator.narrate_entry(store[index])
                write_wav(buffer, out_dir / name, clamp=store.config.clamp_samples)
                progress.advance(name)

        click.echo(f"Narrated {len(selected)} entries -> {out_dir}")
    except CaptionSmithError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)
    finally:
        narrator.cleanup()


@cli.command()
@click.option('--data-path', '-d', default=None, type=click.Path(exists=True, file_okay=False),
              help='Directory of additional Piper .onnx models.')
@click.option('--language', '-l', default=None, help='Only list voices for this language (e.g. en-US).')
def voices(data_path, language):
    """List available narration voices."""
    from captionsmith.narration import (
        PiperNarrator, available_languages, select_default_voice, voices_for_language,
    )

    catalog = PiperNarrator(data_path=Path(data_path) if data_path else None).list_voices()
    if language:
        catalog = voices_for_language(catalog, language)
    if not catalog:
        click.echo("No voices found.")
        return

    default = select_default_voice(catalog)
    click.echo(f"Languages: {', '.join(available_languages(catalog))}")
    for voice in catalog:
        marker = '*' if voice == default else ' '
        click.echo(f" {marker} {voice.name:30s} {voice.lang}")
