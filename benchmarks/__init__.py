"""
Benchmark suite for jsonsourcemap parsing performance.

Measures the cost of recording source locations by comparing
jsonsourcemap.parse against plain decoders:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)
"""
