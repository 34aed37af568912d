"""
Five-fold ministry (APEST) profiling and team assembly.
Pure, stateless core: classify role vectors, propose teams, resolve invite codes.
"""
