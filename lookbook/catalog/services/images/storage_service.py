"""
Image storage listings.

Two sources produce ``(filename, url)`` pairs sorted by name:

- ``SupabaseStorageListing`` pages through the Supabase Storage REST API.
- ``LocalImageDirectory`` walks a local folder (uploads staged on disk).
"""
import logging
import os
import time
from typing import Iterator, List, Optional, Tuple
from urllib.parse import quote

import requests
from django.conf import settings

from .filename_service import IMAGE_EXTENSIONS

logger = logging.getLogger(__name__)

ListingItem = Tuple[str, str]


class StorageListingError(RuntimeError):
    """Storage listing could not be fetched."""
    pass


class SupabaseStorageListing:
    """
    Lists one folder of a Supabase Storage bucket.

    Settings used (overridable through the constructor):
    - SUPABASE_URL
    - SUPABASE_SERVICE_ROLE_KEY
    - CATALOG_IMAGE_BUCKET
    - CATALOG_IMAGE_FOLDER
    """

    PAGE_SIZE = 1000
    MAX_RETRIES = 3
    RETRY_DELAY = 1  # seconds

    def __init__(self, base_url=None, api_key=None, bucket=None, folder=None, timeout=None):
        self.base_url = (base_url or getattr(settings, 'SUPABASE_URL', '')).rstrip('/')
        self.api_key = api_key or getattr(settings, 'SUPABASE_SERVICE_ROLE_KEY', '')
        self.bucket = bucket or getattr(settings, 'CATALOG_IMAGE_BUCKET', 'guess-images')
        folder = folder if folder is not None else getattr(settings, 'CATALOG_IMAGE_FOLDER', 'products')
        self.folder = folder.strip('/')
        self.timeout = timeout or getattr(settings, 'CATALOG_HTTP_TIMEOUT', 30)

        if not self.base_url or not self.api_key:
            raise StorageListingError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be configured")

    @property
    def _headers(self):
        return {
            'apikey': self.api_key,
            'Authorization': f'Bearer {self.api_key}',
        }

    def public_url(self, name: str) -> str:
        path = f"{self.folder}/{name}" if self.folder else name
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{quote(path)}"

    def _fetch_page(self, offset: int) -> List[dict]:
        url = f"{self.base_url}/storage/v1/object/list/{self.bucket}"
        payload = {
            'prefix': self.folder,
            'limit': self.PAGE_SIZE,
            'offset': offset,
            'sortBy': {'column': 'name', 'order': 'asc'},
        }

        last_error = None
        for attempt in range(self.MAX_RETRIES):
            try:
                logger.debug("Storage list request offset=%s attempt %s/%s", offset, attempt + 1, self.MAX_RETRIES)
                response = requests.post(url, json=payload, headers=self._headers, timeout=self.timeout)
                response.raise_for_status()
                data = response.json()
                if not isinstance(data, list):
                    raise StorageListingError(f"Unexpected listing payload at offset {offset}: {data!r}")
                return data
            except requests.RequestException as exc:
                last_error = exc
                logger.warning("Storage listing failed at offset %s (attempt %s): %s", offset, attempt + 1, exc)
                if attempt < self.MAX_RETRIES - 1:
                    time.sleep(self.RETRY_DELAY)

        raise StorageListingError(f"Storage listing failed at offset {offset}: {last_error}")

    def __iter__(self) -> Iterator[ListingItem]:
        offset = 0
        while True:
            items = self._fetch_page(offset)
            for item in items:
                name = item.get('name') or ''
                # folders come back without an extension
                if '.' not in name:
                    continue
                yield name, self.public_url(name)
            if len(items) < self.PAGE_SIZE:
                break
            offset += self.PAGE_SIZE


class LocalImageDirectory:
    """
    Recursively lists image files under ``root``.

    URLs are ``base_url`` + the path relative to ``root``. Files are yielded
    sorted by relative path so the listing is stable between runs.
    """

    def __init__(self, root=None, base_url=None):
        self.root = root or getattr(settings, 'CATALOG_LOCAL_IMAGES_ROOT', '')
        self.base_url = base_url if base_url is not None else getattr(settings, 'CATALOG_LOCAL_IMAGES_URL', '/media/products/')
        if not self.root or not os.path.isdir(self.root):
            raise StorageListingError(f"Image directory not found: {self.root!r}")

    def _relative_paths(self) -> List[str]:
        paths = []
        for dirpath, _dirnames, filenames in os.walk(self.root):
            for filename in filenames:
                ext = filename.rpartition('.')[2].lower()
                if ext not in IMAGE_EXTENSIONS:
                    continue
                full_path = os.path.join(dirpath, filename)
                paths.append(os.path.relpath(full_path, self.root).replace(os.sep, '/'))
        return sorted(paths)

    def __iter__(self) -> Iterator[ListingItem]:
        base = self.base_url if self.base_url.endswith('/') else self.base_url + '/'
        for relative in self._relative_paths():
            yield relative.rsplit('/', 1)[-1], base + quote(relative)


def get_listing(source: str = 'storage', root: Optional[str] = None):
    """Factory used by commands: ``storage`` (Supabase) or ``local``."""
    if source == 'local':
        return LocalImageDirectory(root=root)
    if source == 'storage':
        return SupabaseStorageListing()
    raise StorageListingError(f"Unknown listing source: {source!r}")
