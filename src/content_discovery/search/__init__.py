"""
Discovery algorithms over in-memory document snapshots.

- analyzers: Tokenizer and filters (lowercase, stopwords)
- fuzzy: Normalised edit-distance scoring of documents against a query
- tags: Tag/category extraction and exact filtering
- related: Tag-overlap plus content-similarity ranking
- query_engine: Search, filter, sort and paginate
"""
