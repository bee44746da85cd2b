"""Command-line front end.

Usage:
    speech-preview speak "Hello there" --voice nova --output-dir downloads
    speech-preview speak --file notes.txt --review
    speech-preview voices
    speech-preview serve --port 8000
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .client import SpeechClient
from .form import FormController, FormState
from .hosts import DirectoryHost
from .models import (
    DEFAULT_MODEL,
    DEFAULT_VOICE,
    MAX_TEXT_LENGTH,
    MODEL_LABELS,
    MODELS,
    VOICE_LABELS,
    VOICES,
)


class _PrintNotifier:
    """Write notifications to the terminal."""

    def success(self, message: str) -> None:
        print(message)

    def error(self, message: str) -> None:
        print(f"error: {message}", file=sys.stderr)


def _read_text(args: argparse.Namespace) -> str:
    if args.file is not None:
        return Path(args.file).read_text(encoding="utf-8")
    if args.text == "-":
        return sys.stdin.read()
    return args.text or ""


def _review(form: FormController) -> bool:
    """Ask the user to finalize, regenerate or quit.  True means finalized."""
    while form.state is FormState.PREVIEWED:
        print(f"Preview: {form.audio_handle}")
        answer = input("[f]inalize, [r]egenerate or [q]uit? ").strip().lower()
        if answer.startswith("f"):
            return form.finalize()
        if answer.startswith("r"):
            form.regenerate()
        elif answer.startswith("q"):
            return False
    return False


def cmd_speak(args: argparse.Namespace) -> int:
    host = DirectoryHost(args.output_dir)
    with SpeechClient(args.server) as client, FormController(
        client, host, notifier=_PrintNotifier()
    ) as form:
        form.set_text(_read_text(args))
        form.set_voice(args.voice)
        form.set_model(args.model)

        if not form.preview():
            return 1

        finalized = _review(form) if args.review else form.finalize()
        if not finalized:
            return 1

        filename = form.download()
        if filename is None:
            return 1
        print(host.download_dir / filename)
    return 0


def cmd_voices(args: argparse.Namespace) -> int:
    print("Voices:")
    for voice in VOICES:
        print(f"  {voice:<10} {VOICE_LABELS[voice]}")
    print("Models:")
    for model in MODELS:
        print(f"  {model:<10} {MODEL_LABELS[model]}")
    print(f"Maximum text length: {MAX_TEXT_LENGTH} characters")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from api.config import Settings

    settings = Settings()
    uvicorn.run(
        "api.app:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=settings.debug,
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="speech-preview", description="Preview, finalize and download synthesized speech"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    speak = sub.add_parser("speak", help="Synthesize text and save the MP3")
    source = speak.add_mutually_exclusive_group()
    source.add_argument("text", nargs="?", help="Text to speak, or '-' to read stdin")
    source.add_argument("--file", help="Read the text from a file")
    speak.add_argument("--voice", default=DEFAULT_VOICE, choices=VOICES)
    speak.add_argument("--model", default=DEFAULT_MODEL, choices=MODELS)
    speak.add_argument("--server", default="http://localhost:8000", help="Proxy base URL")
    speak.add_argument("--output-dir", default=".", help="Directory for the downloaded MP3")
    speak.add_argument("--review", action="store_true",
                       help="Listen to the preview before finalizing")
    speak.set_defaults(func=cmd_speak)

    voices = sub.add_parser("voices", help="List the available voices and models")
    voices.set_defaults(func=cmd_voices)

    serve = sub.add_parser("serve", help="Run the text-to-speech API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
