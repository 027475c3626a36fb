# wspcheck/log.py
from rich.console import Console
from rich.markup import escape
from rich.traceback import install

# stdout carries tables and YAML; status lines go to stderr
console = Console(stderr=True)
install(show_locals=False)

# messages quote section names like [default]; keep them out of markup
def info(msg): console.log(f"[bold cyan]INFO[/] {escape(str(msg))}")
def warn(msg): console.log(f"[bold yellow]WARN[/] {escape(str(msg))}")
def err(msg):  console.log(f"[bold red]ERR[/] {escape(str(msg))}")
