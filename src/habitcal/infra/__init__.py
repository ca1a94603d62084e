"""Infrastructure: database engine, live queries, stores and repositories."""
