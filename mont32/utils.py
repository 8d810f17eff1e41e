## Utils

import time
import sympy
import random
import json
import os
import signal
from contextlib import contextmanager

CONFIG_FILENAME = 'mont32.json'
CONFIG_ENV = 'MONT32_CONFIG_PATH'

DEFAULT_CONFIG = {
    "TRIALS": 1000,
    "MIN_BITLEN": 2,
    "MAX_BITLEN": 31,
    "SEED": None,
    "PRIME_MODULI": False,
    "CROSS_CHECK": True
}


def random_list(low, high, count, rng=random):
    return [rng.randint(low, high) for _ in range(count)]


def profiler(num_runs=100, enabled=True):
    def decorator(func):
        if not enabled:
            # If profiling is disabled, return the original function unmodified
            return func

        def wrapper(*args, **kwargs):
            total_time = 0
            for _ in range(num_runs):
                start_time = time.time()
                func(*args, **kwargs)
                end_time = time.time()
                total_time += (end_time - start_time)
            average_time = total_time / num_runs
            print(f"Average execution time for {func.__name__}: {average_time} seconds")
            return func(*args, **kwargs)

        return wrapper

    return decorator


def generate_primes(count, num_bits):
    """Generate a list of random primes of exactly num_bits bits."""
    if num_bits < 2:
        raise ValueError(f'No prime has fewer than 2 bits, got {num_bits}')

    primes = []
    while len(primes) < count:
        prime = sympy.randprime(2 ** (num_bits - 1), 2 ** num_bits)
        primes.append(prime)
    return primes


def load_config():
    # Determine the script directory (assumed to be inside the project root)
    script_directory = os.path.dirname(os.path.abspath(__file__))
    project_root_config_path = os.path.join(script_directory, '..', CONFIG_FILENAME)

    # Paths to check for the config file
    paths_to_check = [
        os.path.join(os.getcwd(), CONFIG_FILENAME),  # Current Working Directory
        os.path.normpath(project_root_config_path)  # Project Root Directory
    ]

    # Check if the environment variable MONT32_CONFIG_PATH is set
    env_config_path = os.getenv(CONFIG_ENV)
    if env_config_path:
        paths_to_check.append(env_config_path)

    config = dict(DEFAULT_CONFIG)
    for path in paths_to_check:
        if os.path.exists(path):
            with open(path, 'r') as file:
                config.update(json.load(file))
            break

    return config


class TimeoutException(Exception):
    pass


@contextmanager
def timeout(time):
    # Signal handler function
    def raise_timeout(signum, frame):
        raise TimeoutException()

    # Set the signal handler and a timer
    signal.signal(signal.SIGALRM, raise_timeout)
    signal.alarm(time)

    try:
        yield
    finally:
        # Disable the alarm
        signal.alarm(0)
