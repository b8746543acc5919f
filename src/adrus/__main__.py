from adrus.cli import app

app(prog_name="adrus")
