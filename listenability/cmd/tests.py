# License: BSD3

"""
Tests for the listenability command
"""

import json
import os

import pytest

from listenability.annotation import Document
from listenability.corpus import FileId
from listenability.delta import DELTA_TYPE
from listenability.xmi import XmiReader, read_xmi, read_xmi_file, write_xmi

from .main import main


def _write(path, text):
    "write a text file"
    with open(path, 'w') as fout:
        fout.write(text)


@pytest.fixture
def analysed_dir(tmp_path):
    "a corpus of one text, analysed into an output dir"
    in_dir = tmp_path / 'in'
    out_dir = tmp_path / 'analysed'
    in_dir.mkdir()
    _write(str(in_dir / 'cat.txt'), 'The cat sat.\n\nDid it rain?')
    _write(str(in_dir / 'dog.txt'), 'Woof.')
    main(['analyze', str(in_dir), '-o', str(out_dir), '--doc', 'cat'])
    return out_dir


def test_analyze(analysed_dir):
    corpus = XmiReader(str(analysed_dir)).slurp()
    assert list(corpus) == [FileId('cat', 'analysed')]
    doc = corpus[FileId('cat', 'analysed')]
    assert len(doc.index.select('Paragraph')) == 2
    assert doc.index.select('Score')


def test_show(analysed_dir, capsys):
    path = str(analysed_dir / 'cat.xmi')
    main(['show', path, '--count'])
    out = capsys.readouterr().out
    assert 'Sentence' in out and 'Score' in out
    main(['show', path, '--type', 'Sentence'])
    out = capsys.readouterr().out
    assert 'Did it rain?' in out
    assert 'Token' not in out


def test_apply_delta(analysed_dir, tmp_path):
    xmi_path = str(analysed_dir / 'cat.xmi')
    with open(xmi_path) as stream:
        xmi = stream.read()
    req_dir = tmp_path / 'requests'
    out_dir = tmp_path / 'responses'
    req_dir.mkdir()
    request = {'xmi': xmi,
               'deltas': [{'begin': 4, 'end': 7, 'new': 'dog'}],
               'state': {'revision': 2}}
    _write(str(req_dir / 'cat.json'), json.dumps(request))
    with pytest.warns(UserWarning):
        main(['apply-delta', str(req_dir), '-o', str(out_dir),
              '--engines', 'tokenizer,ortmann19'])
    with open(str(out_dir / 'cat.json')) as stream:
        response = json.load(stream)
    assert response['state'] == {'revision': 2}
    doc = read_xmi(response['xmi'])
    assert doc.text() == 'The dog sat.\n\nDid it rain?'
    assert [x.features['old'] for x in doc.index.select(DELTA_TYPE)] ==\
        ['cat']
    # the original is left alone
    assert read_xmi_file(xmi_path).text() == 'The cat sat.\n\nDid it rain?'


def test_apply_delta_bad_request(tmp_path):
    req_dir = tmp_path / 'requests'
    req_dir.mkdir()
    _write(str(req_dir / 'bad.json'), '{"xmi": ')
    with pytest.warns(UserWarning):
        with pytest.raises(SystemExit):
            main(['apply-delta', str(req_dir),
                  '-o', str(tmp_path / 'out')])
    assert not os.path.exists(str(tmp_path / 'out' / 'bad.json'))


def test_unknown_engine(tmp_path):
    with pytest.raises(SystemExit):
        main(['analyze', str(tmp_path), '--engines', 'tokenizer,parser'])


def test_apply_delta_corrupt_gzip(tmp_path):
    "a corrupt request file is skipped, the others are applied"
    req_dir = tmp_path / 'requests'
    out_dir = tmp_path / 'out'
    req_dir.mkdir()
    request = json.dumps({'xmi': write_xmi(Document([], 'The cat sat.')),
                          'deltas': [{'begin': 4, 'end': 7, 'new': 'dog'}],
                          'state': None})
    _write(str(req_dir / 'a_good.json'), request)
    with open(str(req_dir / 'b_bad.json.gz'), 'wb') as fout:
        fout.write(b'not gzip at all')
    _write(str(req_dir / 'c_good.json'), request)
    with pytest.warns(UserWarning, match='b_bad'):
        with pytest.raises(SystemExit) as oops:
            main(['apply-delta', str(req_dir), '-o', str(out_dir)])
    assert 'Could not apply 1 of 3' in str(oops.value)
    assert sorted(os.listdir(str(out_dir))) == ['a_good.json', 'c_good.json']


def test_analyze_with_lexicon(tmp_path):
    in_dir = tmp_path / 'in'
    out_dir = tmp_path / 'out'
    in_dir.mkdir()
    _write(str(in_dir / 'cat.txt'), 'The cat sat.')
    lexicon = str(tmp_path / 'lexicon.csv')
    _write(lexicon, 'Word,NSyll\ncat,1\n')
    main(['analyze', str(in_dir), '-o', str(out_dir),
          '--engines', 'tokenizer,kuperman12', '--lexicon', lexicon])
    doc = read_xmi_file(str(out_dir / 'cat.xmi'))
    assert [(x.span.char_start, x.features['name'])
            for x in doc.index.select('Score')] == [(4, 'SyllableCount')]


def test_analyze_missing_lexicon(tmp_path):
    with pytest.raises(SystemExit):
        main(['analyze', str(tmp_path), '--engines', 'tokenizer,kuperman12',
              '--lexicon', str(tmp_path / 'nope.csv')])
