from pathlib import Path

from setuptools import (find_packages,
                        setup)

import connective

project_base_url = 'https://github.com/lycantropos/connective/'

setup(name=connective.__name__,
      packages=find_packages(exclude=('tests', 'tests.*')),
      version=connective.__version__,
      description=connective.__doc__,
      long_description=Path('README.md').read_text(encoding='utf-8'),
      long_description_content_type='text/markdown',
      author='Azat Ibrakov',
      author_email='azatibrakov@gmail.com',
      classifiers=[
          'License :: OSI Approved :: MIT License',
          'Programming Language :: Python :: 3.8',
          'Programming Language :: Python :: 3.9',
          'Programming Language :: Python :: 3.10',
          'Programming Language :: Python :: 3.11',
          'Programming Language :: Python :: 3.12',
          'Programming Language :: Python :: Implementation :: CPython',
      ],
      license='MIT License',
      url=project_base_url,
      download_url=project_base_url + 'archive/master.zip',
      python_requires='>=3.8',
      install_requires=Path('requirements.txt').read_text(encoding='utf-8'),
      extras_require={
          'tests': Path('requirements-tests.txt').read_text(encoding='utf-8')
      })
