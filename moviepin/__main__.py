from moviepin.main import run

run()
