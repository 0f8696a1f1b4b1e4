from nodegrad.cli.main import run

run()
