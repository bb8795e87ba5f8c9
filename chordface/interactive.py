"""Interactive REPL for chordface - tweak the face config live."""

import readline  # noqa: F401 - enables up-arrow history for input()
import shlex

from .cli import _create_player, print_config
from .config import FIELDS, InvalidConfig
from .settings import SettingsStore

_ALIASES = {
    'n': 'vertex_count',
    'count': 'vertex_count',
    'shift': 'vertex_shift',
    'background': 'background_color',
    'line': 'line_color',
}


def parse_message(line):
    """Turn 'key=value key=value' into a configuration message dict.

    Raises ValueError on malformed tokens or unknown keys.
    """
    message = {}
    for token in shlex.split(line):
        if '=' not in token:
            raise ValueError(f"expected key=value, got '{token}'")
        key, value = token.split('=', 1)
        key = _ALIASES.get(key.strip(), key.strip())
        if key not in FIELDS:
            raise ValueError(f"unknown param '{key}'")
        message[key] = value.strip()
    return message


class InteractiveSession:
    """Owns the audio stream and feeds config messages to the face."""

    def __init__(self, args):
        self.player = _create_player(args)
        self.player.renderer.store = SettingsStore(args.settings)

    @property
    def renderer(self):
        return self.player.renderer

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self):
        stream = self.player.open_stream(latency='high')
        stream.start()

        print("Chordface Interactive Mode")
        print("Change the face with key=value, e.g.: vertex_count=24 shift=5")
        print("Type 'show' for the current config, 'help' for info, Ctrl+C to exit.")

        try:
            while True:
                try:
                    line = input("\n> ").strip()
                except EOFError:
                    break
                if not line:
                    continue
                self.handle_input(line)
        except KeyboardInterrupt:
            pass
        finally:
            stream.stop()
            stream.close()
            print("\nStopped.")

    # ------------------------------------------------------------------
    # Input dispatch
    # ------------------------------------------------------------------

    def handle_input(self, line):
        first = line.split()[0]

        if first == 'help':
            self._show_help()
        elif first == 'show':
            print_config(self.renderer.config)
        elif '=' in line:
            self._update_config(line)
        else:
            print(f"Unknown command: {first}")
            print("Available: show, help, key=value")

    def _update_config(self, line):
        try:
            message = parse_message(line)
        except ValueError as e:
            print(f"Parse error: {e}")
            return
        try:
            config = self.renderer.apply_config(message)
        except InvalidConfig as e:
            print(f"Rejected: {e}")
            return
        print_config(config)

    def _show_help(self):
        print("Params (aliases in parentheses):")
        for name in FIELDS:
            aliases = [a for a, f in _ALIASES.items() if f == name]
            alias_str = f" ({', '.join(aliases)})" if aliases else ''
            print(f"  {name}{alias_str}")
        print("\nColors take '#rrggbb'. Changes are saved to the settings file.")
