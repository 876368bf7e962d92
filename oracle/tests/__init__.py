"""
Test suite for the differential oracle.

Focus areas:
- Bound predicates (including overflow-adjacent inclusive ends)
- Fault capture and diagnostics suppression
- Dual execution and invariants, per layout mode
- Ordering parity
- Recorded regression cases
"""
