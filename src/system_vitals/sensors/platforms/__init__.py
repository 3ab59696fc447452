"""Platform-specific sensor implementations.

- base.py: CPU and memory via psutil (all platforms)
- nvidia.py: GPU utilization via NVML
"""
