import psutil


def optimal_threads(cap: int = 8, ram_per_thread_gb: float = 0.5) -> int:
    # each worker holds one manifest in memory; bound by free RAM and leave one core
    cores = max(psutil.cpu_count(logical=False) or 1, 1)
    ram_gb = psutil.virtual_memory().available / (1024**3)
    by_ram = max(1, int(ram_gb / ram_per_thread_gb))
    by_cpu = max(1, cores - 1)
    return max(1, min(by_ram, by_cpu, cap))
