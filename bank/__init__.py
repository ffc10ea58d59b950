'''
bank
====

Create files and directories, and set their timestamps, with one tool.
'''
__version__ = '0.2.0'
