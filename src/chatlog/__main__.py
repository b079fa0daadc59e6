from chatlog.cli import app

app(prog_name="chatlog")
