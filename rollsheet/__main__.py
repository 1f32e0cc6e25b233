from rollsheet.cli import app

app(prog_name="rollsheet")
