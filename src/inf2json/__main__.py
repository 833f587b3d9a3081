from inf2json.cli.app import app

app(prog_name="inf2json")
