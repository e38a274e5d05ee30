"""
Test suite for the reconstruction engine.

Focus areas:
- Model parsing and canonical serialization
- Reconstruction properties (exclusion, deletion, history resolution)
- Memoization transparency
- Load-time validation
"""
