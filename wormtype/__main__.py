from wormtype.app import run

run()
