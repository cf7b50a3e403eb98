"""
Example configuration written by ``boxwine init``.
"""

EXAMPLE_CONFIG = """\
# Example boxwine configuration.
#
# "host" is the computer building the app with boxwine.
# "wineprefix" is the virtual Windows installation bundled in the app.
# Think of it as C:/

[app]
# name of your app, default "My App"
name = "My App"

# path to the icon on the host, default empty
# icon = "path/to/icon.icns"

[app.entrypoint]
# program started when the app is opened, inside the wineprefix
program = "C:/Program Files/My App/app.exe"

# arguments passed to the program, default empty
args = ["--some-arg", "true"]

[wine.build]
# portable WineHQ build: branch, version and architecture
branch = "stable"
version = "5.0"
arch = "64"

[wine.prefix]
# windows architecture of a new wineprefix, default "win64".
# Ignored when base_prefix is set.
prefix_arch = "win64"

# start from an existing wineprefix on the host instead of creating one
# base_prefix = "path/to/existing/wineprefix"

# sandbox the wineprefix (unlink it from the host home), default true
sandbox = true

# Mono is needed for .NET programs, default false
install_mono = false

# Gecko is needed for embedded HTML, default false
install_gecko = false

# delete C:/windows/Installer after installing, default true
delete_installers = true

# compress the wineprefix; it is uncompressed on first launch, default true
compress_wineprefix = true

# Files or folders copied into the wineprefix. "from" is a host path or a
# wineprefix path, "to" must be a wineprefix path starting with "c:".
# Backslashes and forward slashes both work. Volumes marked post_install
# are copied after the programs below have run.
[[wine.volume]]
from = "on/host/program.exe"
to = 'c:\\in\\wineprefix\\program.exe'

[[wine.volume]]
from = "on/host/folder"
to = "c:/in/wineprefix/folder"

[[wine.volume]]
from = "c:/in/wineprefix/another/file.txt"
to = "c:/in/wineprefix/another/file.bak.txt"
post_install = true

# Programs run inside the wineprefix while building, in order.
# Use $WINEPREFIX to point into the wineprefix from the host side.
[[wine.run]]
program = "on/host/Setup.exe"

[[wine.run]]
program = "$WINEPREFIX/drive_c/in/wine/some-file.exe"

[[wine.run]]
program = "on/host/other-file.exe"
args = ["/S", "/D=C:\\\\MyApp"]

[winetricks]
# winetricks verbs to install, default empty
verbs = [
    "directshow",  # for some sound fixes
    "directplay",  # for local multiplayer
]

# copy winetricks into the app, default false
bundle = false
"""

EXAMPLE_CONFIG_YAML = """\
# Example boxwine configuration (YAML dialect).
app:
  name: My App
  entrypoint:
    program: C:/Program Files/My App/app.exe
    args: --some-arg true

wine:
  build:
    branch: stable
    version: "5.0"
    arch: "64"
  prefix:
    prefix_arch: win64
    sandbox: true
    install_mono: false
    install_gecko: false
    delete_installers: true
    compress_wineprefix: true
  volumes:
    - from: on/host/program.exe
      to: c:/in/wineprefix/program.exe
    - from: c:/in/wineprefix/another/file.txt
      to: c:/in/wineprefix/another/file.bak.txt
      post_install: true
  runs:
    - program: on/host/Setup.exe
    - program: on/host/other-file.exe
      args: /S

winetricks:
  verbs: directshow, directplay
  bundle: false
"""
