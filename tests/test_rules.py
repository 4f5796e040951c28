"""
Tests for runtime rule registration and the result cache.
"""
import re

import pytest

from inflector import Inflector, InvalidArgument


class TestRegisterRules:
    """register_rules() puts custom rules ahead of the defaults."""

    def test_delimited_singular_rule(self, inst):
        inst.register_rules('singular', {'/^(f)ezzes$/i': r'\1ez'})
        assert inst.singular('fezzes') == 'fez'

    def test_plain_rule_is_anchored_and_case_insensitive(self, inst):
        inst.register_rules('singular', {'abc': '123'})
        assert inst.singular('abc') == '123'
        assert inst.singular('ABC') == '123'
        assert inst.singular('xabcx') == 'xabcx'

    def test_delimited_plural_rule(self, inst):
        inst.register_rules('plural', {'/^(f)ez$/i': r'\1ezzes'})
        assert inst.plural('fez') == 'fezzes'
        assert inst.plural('Fez') == 'Fezzes'

    def test_compiled_pattern(self, inst):
        inst.register_rules('singular', {re.compile(r'(child)ren$'): r'\1'})
        assert inst.singular('grandchildren') == 'grandchild'

    def test_later_pairs_take_priority(self, inst):
        inst.register_rules('plural', [('/e$/', 'E1'), ('/le$/', 'LE2')])
        assert inst.plural('apple') == 'appLE2'

    def test_same_pattern_replaces_existing_rule(self, inst):
        inst.register_rules('plural', {'/^(f)ez$/i': r'\1ezzes'})
        inst.register_rules('plural', {'/^(f)ez$/i': r'\1ezes'})
        assert inst.plural('fez') == 'fezes'
        assert len([x for x in inst.plurals if x.pattern.pattern == '^(f)ez$']) == 1

    def test_uncountable(self, inst):
        inst.register_rules('uncountable', ['foos'])
        assert inst.singular('foos') == 'foos'
        assert inst.plural('foos') == 'foos'

    def test_uncountable_accepts_single_word_and_mapping(self, inst):
        inst.register_rules('uncountable', 'sheep')
        inst.register_rules('uncountable', {'x': 'deer'})
        assert inst.plural('sheep') == 'sheep'
        assert inst.plural('deer') == 'deer'

    def test_irregular(self, inst):
        inst.register_rules('irregular', {'bars': 'bars'})
        assert inst.singular('bars') == 'bars'

    def test_irregular_goes_to_the_front(self, inst):
        inst.register_rules('irregular', {'cactus': 'cacti', 'child': 'childs'})
        assert list(inst.irregulars)[:2] == ['child', 'cactus']
        assert inst.plural('child') == 'childs'
        assert inst.singular('cacti') == 'cactus'

    def test_rules_stay_on_their_instance(self, inst):
        inst.register_rules('uncountable', ['sheep'])
        assert inst.plural('sheep') == 'sheep'
        assert Inflector().plural('sheep') == 'sheeps'

    def test_context_manager_groups_registrations(self):
        with Inflector() as inst:
            inst.register_rules('plural', {'/^(f)ez$/i': r'\1ezzes'})
            inst.register_rules('uncountable', ['sheep'])
        assert inst.plural('fez') == 'fezzes'
        assert inst.plural('sheep') == 'sheep'

    def test_empty_tables(self, bare):
        assert bare.plural('apple') == 'apple'
        assert bare.singular('apples') == 'apples'
        bare.register_rules('plural', {'/$/': 's'})
        assert bare.plural('pear') == 'pears'


class TestInvalidRules:
    """Invalid input raises InvalidArgument and changes nothing."""

    def test_unknown_category(self, inst):
        with pytest.raises(InvalidArgument):
            inst.register_rules('foo', {'foo': 'bar'})

    def test_invalid_argument_is_a_value_error(self, inst):
        with pytest.raises(ValueError):
            inst.register_rules('acronym', ['HTTP'])

    @pytest.mark.parametrize('find', ['/(unclosed/i', '/abc', '/abc/q', '(bad'])
    def test_bad_pattern(self, inst, find):
        with pytest.raises(InvalidArgument):
            inst.register_rules('plural', {find: 'x'})

    def test_bytes_pattern(self, inst):
        with pytest.raises(InvalidArgument):
            inst.register_rules('plural', {re.compile(b'x$'): 'y'})

    @pytest.mark.parametrize('category', ['plural', 'singular', 'irregular', 'uncountable'])
    def test_rules_not_iterable(self, inst, category):
        with pytest.raises(InvalidArgument):
            inst.register_rules(category, None)

    def test_bad_pair(self, inst):
        with pytest.raises(InvalidArgument):
            inst.register_rules('plural', ['notapair'])

    def test_non_string_words(self, inst):
        with pytest.raises(InvalidArgument):
            inst.register_rules('uncountable', [1])
        with pytest.raises(InvalidArgument):
            inst.register_rules('irregular', {'goose': None})

    def test_failed_call_registers_nothing(self, inst):
        plurals = list(inst.plurals)
        with pytest.raises(InvalidArgument):
            inst.register_rules('plural', [('good', 'x'), ('/(bad/', 'y')])
        assert inst.plurals == plurals

        irregulars = dict(inst.irregulars)
        with pytest.raises(InvalidArgument):
            inst.register_rules('irregular', [('goose', 'geese'), ('moose', 2)])
        assert inst.irregulars == irregulars


class TestResultCache:
    """Results are memoized per namespace and never invalidated by registration."""

    def test_repeated_calls_hit_the_cache(self, inst):
        plurals = list(inst.plurals)
        assert inst.plural('apple') == 'apples'
        assert inst.plural('apple') == 'apples'
        assert inst.cache.size('plural') == 1
        assert inst.plurals == plurals

    def test_every_helper_has_a_namespace(self, inst):
        inst.table_name('Contact')
        inst.class_name('contacts')
        inst.camel_case('camel_case')
        inst.human('contact_manager')
        for namespace in inst.cache.namespaces:
            assert inst.cache.size(namespace) >= 1, namespace

    def test_late_registration_leaves_stale_entry(self, inst):
        assert inst.plural('fez') == 'fezs'
        inst.register_rules('plural', {'/^(f)ez$/i': r'\1ezzes'})
        assert inst.plural('fez') == 'fezs'

        inst.clear_cache('plural')
        assert inst.plural('fez') == 'fezzes'

    def test_singular_fallback_is_not_cached(self, inst):
        assert inst.singular('-----') == '-----'
        assert inst.cache.size('singular') == 0

        inst.register_rules('singular', {'-----': 'dash'})
        assert inst.singular('-----') == 'dash'

    def test_clear_all(self, inst):
        inst.plural('apple')
        inst.human('contact_manager')
        inst.clear_cache()
        assert len(inst.cache) == 0

    def test_clear_unknown_namespace(self, inst):
        with pytest.raises(InvalidArgument):
            inst.clear_cache('bogus')
