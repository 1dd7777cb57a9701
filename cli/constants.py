"""CLI constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = ["upload", "files", "select", "status", "reset", "token", "clear", "exit", "help"]

STYLE = Style.from_dict(
    {
        "prompt": "#818CF8 bold",
        "command": "#0088ff bold",
    }
)

INDIGO = "\033[38;2;129;140;248m"
GREEN = "\033[32m"
RED = "\033[31m"
RESET = "\033[0m"

LOGO = f"""{INDIGO}
 ___           _                   _   ____
|_ _|_ __  ___| |_ _ __ _   _  ___| |_/ ___|  ___ __ _ _ __
 | || '_ \\/ __| __| '__| | | |/ __| __\\___ \\ / __/ _` | '_ \\
 | || | | \\__ \\ |_| |  | |_| | (__| |_ ___) | (_| (_| | | | |
|___|_| |_|___/\\__|_|   \\__,_|\\___|\\__|____/ \\___\\__,_|_| |_|
{RESET}"""

WELCOME_TITLE = "InstructScan CLI - Python source uploader"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "instructscan> "

HELP_TEXT = """Available commands:
  upload <path>     Upload a .py file (max 5 MB)
  files             List files uploaded in this session
  select <id>       Select an uploaded file
  status            Show the current upload state
  reset             Clear a finished upload or error
  token <jwt>       Store the bearer token used for uploads
  clear             Clear screen and redisplay welcome message
  help              Show this help
  exit              Exit REPL

Examples:
  token eyJhbGciOiJIUzI1NiIs...
  upload scripts/main.py
  files
  select 3f2c9a1e-..."""

SUPPORTED_FILE_EXTENSIONS = (".py",)
