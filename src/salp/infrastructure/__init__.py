"""
NumPy-backed implementations: element types, shape math, tensor memory,
tensors, the CPU execution device, configuration and logging setup.
"""
