"""
File Download Examples

Responses with Content-Disposition come back as FileResponse.
"""

import os
import tempfile

from src.smart_http import (
    Authenticator,
    FileResponse,
    HTTPClient,
    HTTPClientRequest,
    InvalidResponseError,
)


def download_file():
    """Save a FileResponse to disk."""
    print("\n=== Download ===")

    with HTTPClient() as client:
        file = client.send(
            HTTPClientRequest(
                base_uri="https://httpbin.org/response-headers",
                endpoint_params={"Content-Disposition": 'attachment; filename="report.txt"'},
            ),
            FileResponse,
        )

    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = os.path.join(tmpdir, file.file_name or "download.bin")
        with open(output_path, 'wb') as f:
            f.write(file.file_content)
        print(f"Saved {len(file.file_content)} bytes to {output_path}")


def download_as_bytes():
    """Request bytes to get the raw file content."""
    print("\n=== Download as bytes ===")

    with HTTPClient() as client:
        content = client.send(
            HTTPClientRequest(
                base_uri="https://httpbin.org/response-headers",
                endpoint_params={"Content-Disposition": "attachment; filename=data.bin"},
                authenticator=Authenticator.basic("user", "passwd"),
            ),
            bytes,
        )

    print(f"Got {len(content)} bytes")


def wrong_result_type():
    """A file cannot be read into a dict."""
    print("\n=== Wrong result type ===")

    with HTTPClient() as client:
        try:
            client.send(
                HTTPClientRequest(
                    base_uri="https://httpbin.org/response-headers",
                    endpoint_params={"Content-Disposition": "attachment; filename=x.bin"},
                ),
                dict,
            )
        except InvalidResponseError as e:
            print(f"InvalidResponseError: {e}")


if __name__ == "__main__":
    download_file()
    download_as_bytes()
    wrong_result_type()
