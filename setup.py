import setuptools

setuptools.setup(
    name='bank',
    packages=setuptools.find_packages(exclude=['tests', 'tests.*']),
    version='0.2.0',
    author='bank',
    description='Create files and directories, and set their timestamps, with one tool.',
    long_description=open('README.md', 'r', encoding='utf-8').read(),
    long_description_content_type='text/markdown',
    python_requires='>=3.8',
    install_requires=[
        'colorama',
        'pyperclip',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
)
