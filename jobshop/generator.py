import random

from jobshop.models import DataInstance


def generate_taillard_instance(n: int, m: int, seed: int = 0) -> DataInstance:
    """Generate a Taillard benchmark-like job shop instance.

    Each of the ``n`` jobs visits every one of the ``m`` machines exactly once
    in a random order, with processing times drawn uniformly from 1..99.
    """
    rng = random.Random(seed)
    jobs = []
    for _ in range(n):
        machines = list(range(m))
        rng.shuffle(machines)
        jobs.append([(machine, rng.randint(1, 99)) for machine in machines])
    return DataInstance.from_pairs(jobs, m)


def write_instance(data: DataInstance, file_path: str) -> None:
    """Write ``data`` in the plain ``<jobs> <machines>`` / pairs format."""
    with open(file_path, "w", encoding="utf-8") as f:
        f.write(f"{data.jobs_number} {data.machines_number}\n")
        for pairs in data.to_pairs():
            f.write(" ".join(f"{m} {p}" for m, p in pairs) + "\n")
