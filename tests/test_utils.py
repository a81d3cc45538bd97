import logging

import numpy as np

from gaussian_sums import config
from gaussian_sums.logging_config import setup_logging
from gaussian_sums.utils import random_generator, reset_shared_generator, shared_generator


def test_random_generator_is_seeded():
    assert random_generator(42).normal() == random_generator(42).normal()
    assert random_generator().normal() == random_generator(config.DEFAULT_SEED).normal()


def test_shared_generator_is_single_instance():
    assert shared_generator() is shared_generator()


def test_reset_shared_generator():
    before = shared_generator()
    after = reset_shared_generator(9)

    assert after is not before
    assert shared_generator() is after
    assert after.normal() == np.random.default_rng(9).normal()


def test_allowed_sample_counts():
    counts = config.allowed_sample_counts()

    assert counts[0] == 10
    assert all(count <= config.MAX_SAMPLE_COUNT for count in counts)
    assert config.DEFAULT_SAMPLE_COUNT in counts


def test_setup_logging_writes_log_file(tmp_path):
    log_file = tmp_path / "gaussian_sums.log"
    logger = setup_logging(logging.DEBUG, str(log_file))
    try:
        assert len(logger.handlers) == 2
        logging.getLogger("gaussian_sums.sampler").info("drawn")
        for handler in logger.handlers:
            handler.flush()
        text = log_file.read_text(encoding="utf-8")
        assert f"Logging to {log_file}" in text
        assert "gaussian_sums.sampler - INFO - drawn" in text
    finally:
        setup_logging(logging.INFO, None)

    assert len(logger.handlers) == 1


def test_setup_logging_defaults_to_config():
    logger = setup_logging()

    assert logger.level == logging.getLevelName(config.LOG_LEVEL)
    assert len(logger.handlers) == (2 if config.LOG_FILE else 1)
