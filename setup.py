from setuptools import setup

setup(
    name='c19series',
    version='0.1.0',
    description='Reconciles COVID-19 case count feeds into per-area cumulative time series',
    packages=['c19series'],
    package_data={'c19series': ['recon/*.csv']},
    python_requires='>=3.7',
    install_requires=[
        'country_converter',
        'numpy',
        'python-dateutil',
    ],
    extras_require={
        'test': ['pytest'],
    },
)
