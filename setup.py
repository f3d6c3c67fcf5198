from setuptools import setup, find_packages

# -------------------------------------------------------------------------------------------------
setup(
    name='fbx_formats',
    version='0.1',
    packages=find_packages(include=['fbx_formats', 'fbx_formats.*']),
    install_requires=[
        'colorama',
    ],
    extras_require={
        'test': ['pytest'],
    },
)
