import os
import sys
from setuptools import setup


try:
    src_dir = os.path.realpath(os.path.join(__file__, '..'))
    sys.path.append(src_dir)
    import tailtint

    version = tailtint.__version__
    description = tailtint.__doc__.strip()
except ImportError:
    tailtint = None
    version = '0.0.0'
    description = 'Tail a growing log file and colorize each new line by ' \
                  'keyword rules.'

test_requires = [
    'pytest > 3.1',
]

setup(
    name='py-tailtint',
    description=description,
    version=version,
    license='GPL 3.0',
    platforms='any',
    packages=[
        'tailtint',
    ],
    entry_points={
        'console_scripts': [
            'py-tailtint = tailtint.main:run',
        ]
    },
    python_requires='>=3.7',
    install_requires=[
        'PyYAML >= 5.1',
        'gnureadline;platform_system=="Darwin"',
    ],
    extras_require={
        'test': test_requires
    },
    setup_requires=[],
)
