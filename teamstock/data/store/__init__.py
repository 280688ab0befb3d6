from teamstock.data.store.blob_store import COLLECTION_KEYS, BlobStore, MemoryBlobStore, SqlBlobStore
from teamstock.data.store.change_feed import ChangeFeed

__all__ = ['COLLECTION_KEYS', 'BlobStore', 'MemoryBlobStore', 'SqlBlobStore', 'ChangeFeed']
