import os

import pytest

from bank import classify
from bank import exceptions

@pytest.mark.parametrize('raw', ['report.txt', 'archive.tar.gz', '.config.toml', 'src/main.py', 'a.b/c.d'])
def test_extension_means_file(tmp_path, raw, no_prompt):
    path = os.path.join(tmp_path, raw)
    kind = classify.classify(path, raw=raw, interactive=True, prompter=no_prompt)
    assert kind is classify.FILE

@pytest.mark.parametrize('raw', ['data/', 'nested/data/', 'data\\', 'v1.2/'])
def test_trailing_separator_means_directory(tmp_path, raw, no_prompt):
    path = os.path.join(tmp_path, raw)
    kind = classify.classify(path, raw=raw, interactive=True, prompter=no_prompt)
    assert kind is classify.DIRECTORY

@pytest.mark.parametrize('raw, expected', [
    ('report.txt', True),
    ('archive.tar.gz', True),
    ('.config.toml', True),
    ('.gitignore', False),
    ('Makefile', False),
    ('file.', False),
    ('data/', False),
    ('v1.2/', False),
])
def test_has_extension(raw, expected):
    assert classify.has_extension(raw) is expected

def test_dotfile_without_extension_defaults_to_file(tmp_path, no_prompt):
    path = os.path.join(tmp_path, '.gitignore')
    assert classify.classify(path, raw='.gitignore', prompter=no_prompt) is classify.FILE

def test_dotfile_without_extension_is_ambiguous(tmp_path):
    calls = []
    def prompter(message, options, default_index):
        calls.append(message)
        return 1
    path = os.path.join(tmp_path, '.cache')
    kind = classify.classify(path, raw='.cache', interactive=True, prompter=prompter)
    assert kind is classify.DIRECTORY
    assert calls == ["What should '.cache' be?"]

def test_existing_directory_beats_extension(tmp_path, no_prompt):
    path = tmp_path / 'weird.txt'
    path.mkdir()
    kind = classify.classify(str(path), raw='weird.txt', interactive=True, prompter=no_prompt)
    assert kind is classify.DIRECTORY

def test_existing_file_beats_prompt(tmp_path, no_prompt):
    path = tmp_path / 'notes'
    path.write_text('')
    kind = classify.classify(str(path), raw='notes', interactive=True, prompter=no_prompt)
    assert kind is classify.FILE

def test_existing_directory_given_without_separator(tmp_path, no_prompt):
    path = tmp_path / 'data'
    path.mkdir()
    assert classify.classify(str(path), prompter=no_prompt) is classify.DIRECTORY

def test_explicit_flags_beat_everything(tmp_path, no_prompt):
    existing = tmp_path / 'existing'
    existing.mkdir()
    assert classify.classify(str(existing), file=True, prompter=no_prompt) is classify.FILE
    assert classify.classify('x.txt', directory=True, prompter=no_prompt) is classify.DIRECTORY
    assert classify.classify('data/', file=True, prompter=no_prompt) is classify.FILE

def test_both_flags_rejected(no_prompt):
    with pytest.raises(exceptions.ValidationError):
        classify.classify('anything', directory=True, file=True, prompter=no_prompt)

def test_prompt_is_asked_with_file_default(tmp_path):
    seen = {}
    def prompter(message, options, default_index):
        seen['options'] = options
        seen['default_index'] = default_index
        return default_index
    path = os.path.join(tmp_path, 'build')
    kind = classify.classify(path, raw='build', interactive=True, prompter=prompter)
    assert kind is classify.FILE
    assert seen == {'options': ['File', 'Directory'], 'default_index': 0}

def test_unanswered_prompt_names_the_path(tmp_path):
    def prompter(message, options, default_index):
        raise exceptions.NoAnswerError(f'No answer for: {message}')
    path = os.path.join(tmp_path, 'build')
    with pytest.raises(exceptions.NoAnswerError) as exc_info:
        classify.classify(path, raw='build', interactive=True, prompter=prompter)
    assert str(exc_info.value) == "No answer for 'build'"

def test_ambiguous_without_interactive_is_file(tmp_path, no_prompt):
    path = os.path.join(tmp_path, 'build')
    assert classify.classify(path, raw='build', prompter=no_prompt) is classify.FILE

def test_checks_order():
    assert classify.CHECKS == [
        classify.check_explicit,
        classify.check_existing,
        classify.check_extension,
        classify.check_separator,
        classify.check_interactive,
        classify.check_default,
    ]

def test_classify_does_not_touch_disk(tmp_path, no_prompt):
    for raw in ['a.txt', 'b/', 'c']:
        classify.classify(os.path.join(tmp_path, raw), raw=raw, prompter=no_prompt)
    assert os.listdir(tmp_path) == []
