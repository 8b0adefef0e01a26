from positions_sync.cli import run

run()
