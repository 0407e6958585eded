from setuptools import setup, find_packages

setup(
   name='codetheta',
   version='1.0',
   description='Eta quotients and theta series for automorphisms of doubly even self-dual codes and their lattices',
   author='The codetheta developers',
   packages=find_packages(exclude=['tests']),
   install_requires=['cypari2', 'passagemath-standard'],
   extras_require={'test': ['pytest']},
)
