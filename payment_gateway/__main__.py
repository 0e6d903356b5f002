import uvicorn

from payment_gateway.config import LOG_LEVEL, PORT


def run():
    # uvicorn handles SIGINT/SIGTERM and drains in-flight requests
    uvicorn.run("payment_gateway.main:app", host="0.0.0.0", port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
