"""
Environment Configuration and Logging Examples

SMART_HTTP_* variables, .env files and structured request logs.
"""

import os

from src.smart_http import (
    HTTPClient,
    HTTPClientConfig,
    HTTPClientRequest,
    LoggingConfig,
    load_from_env,
)


def print_config_summary(config: HTTPClientConfig):
    print(f"  default_timeout: {config.default_timeout}s")
    print(f"  verify_ssl:      {config.verify_ssl}")
    print(f"  logging:         {config.logging.level.value if config.logging else 'off'}")


def example_1_environment_variables():
    """Read SMART_HTTP_* from the process environment."""
    print("\n=== Environment variables ===")

    os.environ["SMART_HTTP_DEFAULT_TIMEOUT"] = "20"
    try:
        print_config_summary(load_from_env())
    finally:
        del os.environ["SMART_HTTP_DEFAULT_TIMEOUT"]


def example_2_env_file():
    """Read a .env file, explicit overrides win."""
    print("\n=== .env file ===")

    with open('.env.example', 'w', encoding='utf-8') as f:
        f.write("SMART_HTTP_DEFAULT_TIMEOUT=45\n")
        f.write("SMART_HTTP_LOG_ENABLED=true\n")
        f.write("SMART_HTTP_LOG_LEVEL=DEBUG\n")
        f.write("SMART_HTTP_LOG_FORMAT=json\n")

    try:
        print_config_summary(load_from_env(env_file='.env.example', default_timeout=5))
    finally:
        os.remove('.env.example')


def example_3_request_logging():
    """Every request is logged with method, masked URL and correlation_id."""
    print("\n=== Request logging ===")

    config = HTTPClientConfig.create(
        timeout=10,
        logging=LoggingConfig.create(level="DEBUG", format="colored"),
    )

    with HTTPClient(config=config) as client:
        client.send(HTTPClientRequest(
            base_uri="https://httpbin.org/get",
            endpoint_params={"api_key": "will-be-masked", "page": 1},
        ))


if __name__ == "__main__":
    example_1_environment_variables()
    example_2_env_file()
    example_3_request_logging()
