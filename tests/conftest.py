import os
from datetime import timedelta

from hypothesis import settings

on_ci = bool(os.getenv('CI', False))
max_examples = 50
settings.register_profile('default',
                          deadline=(timedelta(minutes=1) / max_examples
                                    if on_ci
                                    else None),
                          max_examples=max_examples)
settings.load_profile('default')
