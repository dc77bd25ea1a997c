"""
Python client for the speech-synthesis relay.

Posts an utterance to a running relay and returns (or saves) the MPEG audio
it streams back. Used by the ``granny-speak`` command.
"""
import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests

from .config import RELAY_URL


class RelayClientError(Exception):
    """The relay answered with a JSON error body."""

    def __init__(self, status_code: int, error: str, details: Optional[str] = None):
        self.status_code = status_code
        self.error = error
        self.details = details
        message = f"HTTP {status_code}: {error}"
        if details:
            message += f" ({details})"
        super().__init__(message)


class RelayClient:
    def __init__(self, base_url: str = RELAY_URL, timeout: Optional[float] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/api/text-to-speech"

    def synthesize(self, text: str, voice_id: Optional[str] = None) -> bytes:
        payload: Dict[str, Any] = {"text": text}
        if voice_id:
            payload["voiceId"] = voice_id
        response = requests.post(self.endpoint, json=payload, timeout=self.timeout)
        if response.status_code == 200:
            return response.content
        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            data = {"error": response.text or response.reason}
        raise RelayClientError(response.status_code, data.get("error", "Unknown error"), data.get("details"))

    def save(self, text: str, path, voice_id: Optional[str] = None) -> Path:
        out = Path(path)
        out.write_bytes(self.synthesize(text, voice_id=voice_id))
        return out


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="granny-speak", description="Synthesize speech through the Granny.AI relay")
    parser.add_argument("text", help="Text to speak")
    parser.add_argument("-o", "--output", default="speech.mp3", help="Where to write the MPEG audio")
    parser.add_argument("--voice", default=None, help="Provider voice id (relay default when omitted)")
    parser.add_argument("--url", default=RELAY_URL, help="Base URL of the relay")
    args = parser.parse_args(argv)

    client = RelayClient(args.url)
    try:
        out = client.save(args.text, args.output, voice_id=args.voice)
    except RelayClientError as e:
        print(f"Relay error: {e}", file=sys.stderr)
        return 1
    except requests.RequestException as e:
        print(f"Could not reach relay at {client.endpoint}: {e}", file=sys.stderr)
        return 1
    print(f"Wrote {out.stat().st_size} bytes to {out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
