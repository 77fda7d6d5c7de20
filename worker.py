# worker.py
from prefect import serve
from salesboard.flows import run_seed_pipeline

if __name__ == "__main__":
    # On-demand rebuild of the transactions table from the seed source.
    reseed = run_seed_pipeline.to_deployment(
        name="reseed-transactions",
        tags=["seed", "manual"],
        description="Drops the transactions table and reloads it from the seed source."
    )

    serve(reseed, limit=1, pause_on_shutdown=False)
