"""
NumPy CPU kernels backing the node catalog.

Kernels operate on raw ``np.ndarray`` buffers and know nothing about
nodes, tensors, or the network.
"""
