"""Command-line entrypoint for genbridge.

Usage::

    python -m genbridge generate "Explain SSE" --model gemini-2.5-flash --stream
    python -m genbridge probe --base-url https://api.deepseek.com/v1 --name deepseek

``generate`` prints the generated text (live when streaming) and ``probe``
prints the probe message. With ``--json`` the full result object is printed
instead. The exit code is ``0`` on success and ``1`` when the result carries
an error; ``2`` is reserved for invalid arguments.
"""

from __future__ import annotations

import argparse
import base64
import json
import mimetypes
import sys
from pathlib import Path
from typing import Optional

from .base.models import InlineImage
from .config import get_provider_config
from .config.defaults import CLI_DEFAULT_MODEL
from .providers import select_provider
from .service import check_api_channel, generate


def _str2bool(v: str | None) -> bool:
    """Permissive truthy/falsey parsing for ``--stream [VALUE]``."""
    if v is None:
        return True
    val = v.strip().lower()
    if val in {"1", "t", "true", "y", "yes", "on"}:
        return True
    return False if val in {"0", "f", "false", "n", "no", "off"} else bool(val)


def add_stream_flags(parser: argparse.ArgumentParser) -> None:
    """Attach ``--stream``/``--no-stream`` flags to a parser.

    ``--stream`` accepts an optional boolean and defaults to ``True`` when
    given without a value; ``--no-stream`` is the explicit negation.
    """
    grp = parser.add_mutually_exclusive_group()
    grp.add_argument("--stream", nargs="?", const=True, type=_str2bool, default=False)
    grp.add_argument("--no-stream", dest="stream", action="store_false")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="genbridge", description="Unified Gemini / OpenAI-compatible generation client")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_gen = sub.add_parser("generate", help="Generate text for a prompt")
    p_gen.add_argument("prompt")
    p_gen.add_argument("--model", default=CLI_DEFAULT_MODEL)
    p_gen.add_argument("--system", default=None, help="System instruction")
    p_gen.add_argument("--base-url", default=None)
    p_gen.add_argument("--api-key", default=None)
    p_gen.add_argument("--reduced", action="store_true", help="Lower temperature and output ceiling")
    p_gen.add_argument("--image", default=None, metavar="PATH", help="Attach an image file")
    p_gen.add_argument("--locale", default=None)
    add_stream_flags(p_gen)
    p_gen.add_argument("--json", action="store_true")

    p_probe = sub.add_parser("probe", help="Check that an API channel is reachable")
    p_probe.add_argument("--base-url", required=True)
    p_probe.add_argument("--api-key", default=None)
    p_probe.add_argument("--name", default=None, help="Channel name (used for provider selection)")
    p_probe.add_argument("--locale", default=None)
    p_probe.add_argument("--json", action="store_true")
    return p


def load_image(path: str) -> InlineImage:
    """Read an image file into an inline base64 attachment."""
    file = Path(path)
    mime, _ = mimetypes.guess_type(file.name)
    data = base64.b64encode(file.read_bytes()).decode("ascii")
    return InlineImage(mime_type=mime or "application/octet-stream", data=data)


def handle_generate(args: argparse.Namespace) -> int:
    image: Optional[InlineImage] = None
    if args.image:
        try:
            image = load_image(args.image)
        except OSError as exc:
            print(json.dumps({"error": f"cannot read image: {exc}"}), file=sys.stderr)
            return 2

    live = args.stream and not args.json

    def _on_chunk(delta: str, _text: str, finished: bool) -> None:
        if not live:
            return
        if finished:
            sys.stdout.write("\n")
        else:
            sys.stdout.write(delta)
        sys.stdout.flush()

    result = generate(
        args.prompt,
        args.model,
        system_instruction=args.system,
        reduced_capacity=args.reduced,
        image=image,
        base_url=args.base_url,
        api_key=args.api_key,
        on_stream_chunk=_on_chunk if args.stream else None,
        locale=args.locale,
    )
    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False))
    elif not result.ok:
        print(result.text, file=sys.stderr)
    elif not live:
        print(result.text)
    return 0 if result.ok else 1


def handle_probe(args: argparse.Namespace) -> int:
    api_key = args.api_key
    if not api_key:
        provider = select_provider(args.base_url, args.name)
        api_key = get_provider_config(provider.name).get("api_key") or ""
    result = check_api_channel(args.base_url, api_key, args.name, locale=args.locale)
    if args.json:
        print(json.dumps({"success": result.success, "message": result.message}, ensure_ascii=False))
    else:
        print(result.message, file=sys.stdout if result.success else sys.stderr)
    return 0 if result.success else 1


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint; returns the process exit code."""
    args = build_parser().parse_args(argv)
    if args.cmd == "probe":
        return handle_probe(args)
    return handle_generate(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
