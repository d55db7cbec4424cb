"""KVB - key-value store browser backend."""
