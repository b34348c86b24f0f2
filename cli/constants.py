"""CLI constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = [
    "keyspaces", "create-keyspace", "drop-keyspace",
    "cfs", "create-cf", "drop-cf",
    "put", "get", "delete",
    "put-file", "get-file", "delete-file",
    "scan", "clear", "exit", "help",
]

STYLE = Style.from_dict(
    {
        "prompt": "#2E8B57 bold",
        "command": "#0088ff bold",
    }
)

SEA_GREEN = "\033[38;2;46;139;87m"
GREEN = "\033[32m"
RESET = "\033[0m"

LOGO = f"""{SEA_GREEN}
 ██╗    ██╗██╗██████╗ ███████╗██████╗  ██████╗ ██╗    ██╗
 ██║    ██║██║██╔══██╗██╔════╝██╔══██╗██╔═══██╗██║    ██║
 ██║ █╗ ██║██║██║  ██║█████╗  ██████╔╝██║   ██║██║ █╗ ██║
 ██║███╗██║██║██║  ██║██╔══╝  ██╔══██╗██║   ██║██║███╗██║
 ╚███╔███╔╝██║██████╔╝███████╗██║  ██║╚██████╔╝╚███╔███╔╝
  ╚══╝╚══╝ ╚═╝╚═════╝ ╚══════╝╚═╝  ╚═╝ ╚═════╝  ╚══╝╚══╝
{RESET}"""

WELCOME_TITLE = "widerow CLI - records and chunked files on a column-family store"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "widerow> "

DEFAULT_SCAN_LIMIT = 20

HELP_TEXT = """Available commands:
  keyspaces                                   List keyspaces
  create-keyspace [replication_factor]        Create the configured keyspace (SimpleStrategy)
  drop-keyspace                               Drop the configured keyspace
  cfs                                         List column families of the keyspace
  create-cf <cf> [binary-column...]           Create a column family
  drop-cf <cf>                                Drop a column family
  put <cf> <key> name=value...                Write record columns
  get <cf> <key>                              Show a record
  delete <cf> <key>                           Delete a record
  put-file <cf> <key> <path> [name=value...]  Store a local file in chunks
  get-file <cf> <key> <path>                  Write a stored file to a local path
  delete-file <cf> <key>                      Delete a stored file and its chunks
  scan <cf> [limit]                           List records in key order (default 20)
  clear                                       Clear screen and redisplay welcome message
  help                                        Show this help
  exit                                        Exit REPL

Examples:
  create-keyspace 1
  create-cf docs
  put docs readme title="Read me" owner=alice
  put-file docs report ./report.pdf type=pdf
  get-file docs report ./copy.pdf
  scan docs 50"""
