# pointerkeys

A modal, keyboard-driven pointing system. Once a mode is active, the mouse
pointer follows the keyboard. You can steer it continuously, jump to a
labelled hint, narrow in on a grid cell, or return to a spot you clicked
before.

The package holds the logic of these modes. Drawing, input and pointer
control go through a `Platform` object that you supply (see "What is not
included" below).

## Modes

- **Normal mode** (`pointerkeys.normal.normal_mode`): with the default
  bindings, `h` `j` `k` `l` move the pointer, and it accelerates while a key
  is held. Hold `a` to go faster or `d` to go slower. A number typed before
  a movement key jumps that many 15-pixel steps at once. `m` `,` `.` click,
  `v` toggles dragging, `e` and `r` scroll, `H` `M` `L` `0` `$` jump to the
  edges and middle of the screen, and `C-o` / `C-i` step back and forward
  through the positions of the session.
- **Hint mode** (`HintModes.full`): two-letter labels cover the screen. Type
  a label to warp there. The two-pass variant then shows a small grid of
  one-letter hints around that spot for finer placement.
- **Grid mode** (`pointerkeys.grid.grid_mode`): the screen is split into
  cells. Pick one with `u` `i` `j` `k`, halve the grid with `W` `A` `S` `D`,
  or move it with `w` `a` `s` `d`.
- **History mode** (`HintModes.history`): each position stored in the
  session's `HistoryFile` gets a one-letter hint.
- **Hint spec mode** (`HintModes.spec`): hints are read from a stream of
  `label x y` lines.
- **Screen selection**: each screen gets a character from `screen_chars`.
  Typing one moves the pointer to the middle of that screen.

`pointerkeys.modes.mode_loop` switches between the modes. In oneshot mode it
prints the final position as `x y` to the session's output stream. In hint
spec mode it adds the selected label. `daemon_loop` waits for the activation
keys and reloads the configuration whenever the file changes.

## Configuration

`Config.load(path)` resets every option to its default and then applies a
plain-text file with one `key: value` entry per line. A path of `-` reads
standard input. If the file cannot be opened, only the defaults remain.
Lines that start with `#` are skipped, and so are keys the program does not
know. Later entries shadow earlier ones.

```
# faster pointer, bigger hints
speed: 300
max_speed: 2000
hint_size: 25
hint_chars: asdfghjkl
activation_key: A-M-c
hint_activation_key: A-M-x
```

Key names may carry the modifier prefixes `C-` (Control), `A-` (Alt), `M-`
(Meta) and `S-` (Shift). A list of keys is separated by spaces, as in
`buttons: m , .`. The value `unbind` turns a binding off.

Integer options must hold digits only, with an optional leading `-`. Any
other value raises `ConfigError`, and so does an unknown modifier prefix. An
unknown key name only prints an error to standard error.

`describe_options()` returns one line for each option, with its description
and default. `option_type(key)` returns an option's `OptionType`.

## Using the library

```python
from pointerkeys.colors import hex_to_rgba
from pointerkeys.hints import generate_fullscreen_hints, filter_hints
from pointerkeys.history import History

color = hex_to_rgba("#FF4500")      # RGBA(r=255, g=69, b=0, a=255)

hints = generate_fullscreen_hints("abc", 1920, 1080, 20)
matching = filter_hints(hints, "a")  # hints labelled "aa", "ab", "ac"

history = History(16)
history.add(100, 200)
history.add(300, 400)
history.prev()
print(history.current())             # (100, 200)
```

The other modules are:

- `platform`: the `Mod`, `ScrollDirection`, `InputEvent` and `Hint` types,
  the `Platform` protocol, and `select_backend`, which returns `"wayland"`
  when `WAYLAND_DISPLAY` is set and `"x"` otherwise.
- `keys`: `parse_key`, `event_to_str` and `KeyMatcher`, which tells a key
  match apart from a full match, modifiers included.
- `mouse`: `Mouse`, for accelerated, time-based movement.
- `histfile`: `HistoryFile`, a small binary file of recently clicked
  positions.
- `filemon`: `FileMonitor`, which polls files for changed modification
  times.
- `colors`: `hex_to_rgba` and `opacity_cardinal`.
- `session`: `Session`, which ties together the platform, the configuration,
  the movement state and the histories.

## What is not included

The package has no display backend. There is no X11 or Wayland
implementation of `Platform`: nothing that grabs the keyboard, moves the
real pointer or draws hints and boxes on screen. `select_backend` only names
the backend to use. The package also installs no command. To run the modes,
build a `Session` around your own `Platform` implementation and call
`mode_loop` or `daemon_loop`.