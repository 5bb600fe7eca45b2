"""FIFO semaphores, Hoare monitors and small multithreading demonstrations."""

__version__ = "0.1.0"