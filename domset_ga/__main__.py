from domset_ga.main import run

run()
