"""Run the API server: ``python -m records_api``."""
from records_api.main import run

if __name__ == "__main__":
    run()
