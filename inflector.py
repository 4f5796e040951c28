# -*- coding: utf-8 -*-
'''
    inflector
    ~~~~~~~~~

    Rails-style English noun inflection and identifier casing helpers.

    :copyright: (c) 2012-2015 by Janne Vanhala

    :license: MIT, see LICENSE for more details.
'''
import logging
import re
import threading
from collections import namedtuple
from collections.abc import Iterable, Mapping

__version__ = '1.0.0'

log = logging.getLogger(__name__)


class InvalidArgument(ValueError):
    '''Raised when rules passed to :meth:`Inflector.register_rules` are not
    usable. Nothing is registered when this is raised.'''


#: A single substitution rule: a compiled pattern and its replacement template.
Rule = namedtuple('Rule', 'pattern replacement')


def _ci_re(pattern):
    return '(?i:%s)' % (pattern, )


def _as_re(string):
    return r'^%s$' % (string, )


def _transform_group(func, group=0):
    def _match(match):
        s = match.group(group)
        return func(s)

    return _match


_match_group_upper = _transform_group(str.upper)

# leading character of every whitespace separated word
_word_start_re = re.compile(r'(?:^|(?<=[ \t\r\n\f\v]))[^ \t\r\n\f\v]')
_case_boundary_re = re.compile(r'(?<=\w)([A-Z])', re.ASCII)

_delimiter_flags = {
    'i': re.IGNORECASE,
    'm': re.MULTILINE,
    's': re.DOTALL,
    'x': re.VERBOSE,
    'u': 0,
}


def _ucwords(string):
    return _word_start_re.sub(_match_group_upper, string)


def _lcfirst(string):
    return string[:1].lower() + string[1:]


def _compile_pattern(find):
    '''Compile a rule pattern.

    Accepts a compiled pattern, a delimited ``/body/flags`` string, or a plain
    string that is anchored on both ends and matched case-insensitively.
    '''
    if isinstance(find, re.Pattern):
        if not isinstance(find.pattern, str):
            raise InvalidArgument('Rule pattern must match strings, got %r' % (find, ))
        return find
    if not isinstance(find, str):
        raise InvalidArgument('Rule pattern must be a string, got %r' % (find, ))

    if find.startswith('/'):
        end = find.rfind('/')
        if end == 0:
            raise InvalidArgument('Unterminated pattern %r' % (find, ))
        body, flags = find[1:end], 0
        for flag in find[end + 1:]:
            try:
                flags |= _delimiter_flags[flag]
            except KeyError:
                raise InvalidArgument('Unknown flag %r in pattern %r' % (flag, find)) from None
    else:
        body, flags = _as_re(find), re.IGNORECASE

    try:
        return re.compile(body, flags)
    except re.error as exc:
        raise InvalidArgument('Invalid pattern %r: %s' % (find, exc)) from exc


def _compile_rule(find, replacement):
    pattern = _compile_pattern(find)
    if not isinstance(replacement, str):
        raise InvalidArgument('Replacement for %r must be a string' % (find, ))
    try:
        # the template is parsed even when nothing matches
        pattern.sub(replacement, '')
    except (re.error, IndexError) as exc:
        raise InvalidArgument('Invalid replacement %r for %r: %s' % (replacement, find, exc)) from exc
    return Rule(pattern, replacement)


def _pairs(rules):
    if isinstance(rules, Mapping):
        rules = rules.items()
    elif not isinstance(rules, Iterable):
        raise InvalidArgument('Expected a mapping or a sequence of pairs, got %r' % (rules, ))
    pairs = []
    for item in rules:
        try:
            find, replace = item
        except (TypeError, ValueError):
            raise InvalidArgument('Expected a (find, replace) pair, got %r' % (item, )) from None
        pairs.append((find, replace))
    return pairs


def _words(rules):
    if isinstance(rules, str):
        rules = [rules]
    elif isinstance(rules, Mapping):
        rules = rules.values()
    elif not isinstance(rules, Iterable):
        raise InvalidArgument('Expected a list of words, got %r' % (rules, ))
    words = list(rules)
    for word in words:
        if not isinstance(word, str):
            raise InvalidArgument('Uncountable words must be strings, got %r' % (word, ))
    return words


def _apply_rules(word, rules):
    for rule in rules:
        result, matches = rule.pattern.subn(rule.replacement, word)
        if matches:
            return result

    return None


DEFAULT_PLURALS = tuple(Rule(re.compile(pattern), replacement) for pattern, replacement in (
    (_ci_re(r'(quiz)$'), r'\1zes'),
    (_ci_re(r'^(oxen)$'), r'\1'),
    (_ci_re(r'^(ox)$'), r'\1en'),
    (_ci_re(r'^(m|l)ice$'), r'\1ice'),
    (_ci_re(r'^(m|l)ouse$'), r'\1ice'),
    (_ci_re(r'(matr|vert|ind)(?:ix|ex)$'), r'\1ices'),
    (_ci_re(r'(x|ch|ss|sh)$'), r'\1es'),
    (_ci_re(r'([^aeiouy]|qu)y$'), r'\1ies'),
    (_ci_re(r'(hive)$'), r'\1s'),
    (_ci_re(r'(?:([^f])fe|([lr])f)$'), r'\1\2ves'),
    (_ci_re(r'sis$'), r'ses'),
    (_ci_re(r'([ti])a$'), r'\1a'),
    (_ci_re(r'([ti])um$'), r'\1a'),
    (_ci_re(r'(buffal|tomat)o$'), r'\1oes'),
    (_ci_re(r'(bu)s$'), r'\1ses'),
    (_ci_re(r'(alias|status)$'), r'\1es'),
    (_ci_re(r'(octop|vir)i$'), r'\1i'),
    (_ci_re(r'(octop|vir)us$'), r'\1i'),
    (_ci_re(r'^(ax|test)is$'), r'\1es'),
    (r's$', r's'),
    # matches everything, so plural() always has an answer
    (r'$', r's'),
))

DEFAULT_SINGULARS = tuple(Rule(re.compile(pattern), replacement) for pattern, replacement in (
    (_ci_re(r'(database)s$'), r'\1'),
    (_ci_re(r'(quiz)zes$'), r'\1'),
    (_ci_re(r'(matr)ices$'), r'\1ix'),
    (_ci_re(r'(vert|ind)ices$'), r'\1ex'),
    (_ci_re(r'^(ox)en'), r'\1'),
    (_ci_re(r'(alias|status)(es)?$'), r'\1'),
    (_ci_re(r'(octop|vir)(us|i)$'), r'\1us'),
    (_ci_re(r'^(a)x[ie]s$'), r'\1xis'),
    (_ci_re(r'(cris|test)(is|es)$'), r'\1is'),
    (_ci_re(r'(shoe)s$'), r'\1'),
    (_ci_re(r'(o)es$'), r'\1'),
    (_ci_re(r'(bus)(es)?$'), r'\1'),
    (_ci_re(r'^(m|l)ice$'), r'\1ouse'),
    (_ci_re(r'(x|ch|ss|sh)es$'), r'\1'),
    (_ci_re(r'(m)ovies$'), r'\1ovie'),
    (_ci_re(r'(s)eries$'), r'\1eries'),
    (_ci_re(r'([^aeiouy]|qu)ies$'), r'\1y'),
    (_ci_re(r'([lr])ves$'), r'\1f'),
    (_ci_re(r'(tive)s$'), r'\1'),
    (_ci_re(r'(hive)s$'), r'\1'),
    (_ci_re(r'([^f])ves$'), r'\1fe'),
    (_ci_re(r'(^analy)(sis|ses)$'), r'\1sis'),
    (_ci_re(r'((a)naly|(b)a|(d)iagno|(p)arenthe|(p)rogno|(s)ynop|(t)he)(sis|ses)$'), r'\1sis'),
    (_ci_re(r'([ti])a$'), r'\1um'),
    (_ci_re(r'(n)ews$'), r'\1ews'),
    (_ci_re(r'(ss)$'), r'\1'),
    (_ci_re(r's$'), r''),
))

DEFAULT_IRREGULARS = (
    ('child', 'children'),
    ('criterion', 'criteria'),
    ('man', 'men'),
    ('money', 'monies'),
    ('niche', 'niches'),
    ('person', 'people'),
    ('sex', 'sexes'),
)

DEFAULT_UNCOUNTABLES = ('equipment', 'information', 'research', 'series', 'news', 'weather')


class ResultCache(object):
    '''Memoized results of the public transformations, one namespace per
    operation. Entries are never evicted.'''
    namespaces = ('plural', 'singular', 'studlyCaps', 'camelCase', 'underscored', 'tableName', 'className', 'human')

    def __init__(self):
        self._entries = dict((namespace, {}) for namespace in self.namespaces)

    def __len__(self):
        return sum(len(entries) for entries in self._entries.values())

    def get(self, namespace, key):
        return self._entries[namespace].get(key)

    def put(self, namespace, key, value):
        self._entries[namespace][key] = value
        return value

    def size(self, namespace):
        return len(self._entries[namespace])

    def clear(self, namespace='all'):
        if namespace == 'all':
            for name in self.namespaces:
                self.clear(name)
            return

        if namespace not in self._entries:
            raise InvalidArgument('Invalid cache namespace %s' % (namespace, ))
        self._entries[namespace].clear()


class Inflector(object):
    '''.. class:: Inflector([defaults : bool])

    An inflection engine holding its own rule tables, exception dictionaries
    and result cache. :meth:`Inflector.instance` yields the shared instance
    behind the module-level functions; construct your own to keep custom
    rules isolated. This class implements the context manager protocol, the
    block holds the engine's lock so grouped registrations land together.

        >>> with Inflector() as inst:
        ...     inst.register_rules('plural', {'/^(f)ez$/i': r'\\1ezzes'})
        ...     inst.register_rules('irregular', {'octopus': 'octopodes'})
        ...     inst.register_rules('uncountable', ['sheep'])
        ...
        >>> inst.plural('fez')
        'fezzes'
        >>> inst.singular('octopodes')
        'octopus'
        >>> inst.plural('sheep')
        'sheep'

    New rules are added at the top, so they run before any of the built-in
    rules. Registration does not touch the result cache: a word inflected
    before its rule was registered keeps the old answer until
    :meth:`clear_cache` is called.

    :param bool defaults: Load the built-in English tables.
    '''
    categories = ('singular', 'plural', 'irregular', 'uncountable')

    __shared = {}
    __shared_lock = threading.Lock()

    def __init__(self, defaults=True):
        self.plurals = []
        self.singulars = []
        self.irregulars = {}
        self.uncountables = []
        self.cache = ResultCache()
        self._lock = threading.RLock()

        if defaults:
            self.plurals.extend(DEFAULT_PLURALS)
            self.singulars.extend(DEFAULT_SINGULARS)
            self.irregulars.update(DEFAULT_IRREGULARS)
            self.uncountables.extend(DEFAULT_UNCOUNTABLES)

    def __enter__(self):
        self._lock.acquire()
        return self

    def __exit__(self, *args):
        self._lock.release()

    @classmethod
    def instance(cls):
        '''.. method:: instance() -> Inflector

        Fetch the shared instance used by the module-level functions, creating
        it with the default tables on first use.
        '''
        try:
            return cls.__shared[cls]
        except KeyError:
            with cls.__shared_lock:
                return cls.__shared.setdefault(cls, cls())

    def register_rules(self, category, rules):
        '''.. method:: register_rules(category : str, rules)

        Add custom rules ahead of every existing rule of the same category.

        ``singular`` and ``plural`` take ``{find: replace}`` pairs (a mapping or
        a sequence of pairs). ``find`` may be a compiled pattern, a delimited
        ``'/(quiz)$/i'`` string, or a plain word matched whole and
        case-insensitively. ``irregular`` takes ``{singular: plural}`` pairs,
        ``uncountable`` a list of words.

        :param str category: One of ``singular``, ``plural``, ``irregular`` or
            ``uncountable``.
        :raises InvalidArgument: On an unknown category or an unusable rule.
        '''
        if category not in self.categories:
            raise InvalidArgument('Invalid rule type %s' % (category, ))

        if category == 'uncountable':
            words = _words(rules)
            with self._lock:
                self.uncountables.extend(words)
            log.debug('Registered %d uncountable word(s)', len(words))
            return

        pairs = _pairs(rules)
        if category == 'irregular':
            for singular, plural in pairs:
                if not isinstance(singular, str) or not isinstance(plural, str):
                    raise InvalidArgument('Irregular words must be strings, got %r' % ((singular, plural), ))
            with self._lock:
                for singular, plural in pairs:
                    self._prepend_irregular(singular, plural)
            log.debug('Registered %d irregular word(s)', len(pairs))
            return

        compiled = [_compile_rule(find, replace) for find, replace in pairs]
        with self._lock:
            table = self.plurals if category == 'plural' else self.singulars
            for rule in compiled:
                key = rule.pattern.pattern, rule.pattern.flags
                table[:] = [x for x in table if (x.pattern.pattern, x.pattern.flags) != key]
                table.insert(0, rule)
        log.debug('Registered %d %s rule(s)', len(compiled), category)

    def _prepend_irregular(self, singular, plural):
        items = [(k, v) for k, v in self.irregulars.items() if k != singular]
        self.irregulars.clear()
        self.irregulars[singular] = plural
        self.irregulars.update(items)

    def clear_cache(self, namespace='all'):
        '''Forget cached results, for one namespace or for all of them.'''
        with self._lock:
            self.cache.clear(namespace)
        log.debug('Cleared %s inflection cache', namespace)

    def is_uncountable(self, word):
        return word in self.uncountables

    def _cached(self, namespace, word, func):
        with self._lock:
            result = self.cache.get(namespace, word)
            if result is None:
                result = self.cache.put(namespace, word, func(word))
            return result

    def _pluralize(self, word):
        if word in self.irregulars:
            return self.irregulars[word]
        if self.is_uncountable(word):
            return word

        result = _apply_rules(word, self.plurals)
        return word if result is None else result

    def plural(self, word):
        '''Convert a singular noun to its plural form: ``apple`` -> ``apples``.'''
        return self._cached('plural', word, self._pluralize)

    def singular(self, word):
        '''Convert a plural noun to its singular form: ``apples`` -> ``apple``.

        Words matched by no rule come back unchanged and are not cached.
        '''
        with self._lock:
            result = self.cache.get('singular', word)
            if result is not None:
                return result

            for singular, plural in self.irregulars.items():
                if plural == word:
                    return self.cache.put('singular', word, singular)

            if self.is_uncountable(word):
                return self.cache.put('singular', word, word)

            result = _apply_rules(word, self.singulars)
            if result is None:
                return word
            return self.cache.put('singular', word, result)

    pluralize = plural
    singularize = singular

    def studly_caps(self, word):
        '''``studly_caps`` -> ``StudlyCaps``'''
        return self._cached('studlyCaps', word, lambda s: _ucwords(s.replace('_', ' ')).replace(' ', ''))

    def camel_case(self, word):
        '''``camel_case`` -> ``camelCase``'''
        return self._cached('camelCase', word, lambda s: _lcfirst(self.studly_caps(s)))

    def underscored(self, word):
        '''``ContactNotes`` -> ``contact_notes``'''
        return self._cached('underscored', word, lambda s: _case_boundary_re.sub(r'_\1', s).lower())

    def human(self, word):
        '''``contact_manager`` -> ``Contact Manager``'''
        return self._cached('human', word, lambda s: _ucwords(s.replace('_', ' ')))

    def table_name(self, class_name):
        '''Derive a table name from a class name: ``ContactEmail`` -> ``contact_emails``.'''
        return self._cached('tableName', class_name, lambda s: self.plural(self.underscored(s)))

    def class_name(self, table_name):
        '''Derive a class name from a table name: ``contact_emails`` -> ``ContactEmail``.'''
        return self._cached('className', table_name, lambda s: self.studly_caps(self.singular(s)))


def plural(word):
    '''
    Return the plural form of a singular noun.

    Examples::

        >>> plural('company')
        'companies'
        >>> plural('child')
        'children'
        >>> plural('equipment')
        'equipment'

    '''
    return Inflector.instance().plural(word)


def singular(word):
    '''
    Return the singular form of a plural noun. Words matched by no rule are
    returned as they are.

    Examples::

        >>> singular('companies')
        'company'
        >>> singular('people')
        'person'
        >>> singular('-----')
        '-----'

    '''
    return Inflector.instance().singular(word)


pluralize = plural
singularize = singular


def studly_caps(word):
    return Inflector.instance().studly_caps(word)


def camel_case(word):
    return Inflector.instance().camel_case(word)


def underscored(word):
    return Inflector.instance().underscored(word)


def human(word):
    return Inflector.instance().human(word)


def table_name(class_name):
    '''
    Underscore a class name and pluralize it.

    Examples::

        >>> table_name('ContactEmail')
        'contact_emails'
        >>> table_name('Company')
        'companies'

    '''
    return Inflector.instance().table_name(class_name)


def class_name(table_name):
    '''
    Singularize a table name and studly-case it.

    Examples::

        >>> class_name('contact_emails')
        'ContactEmail'

    '''
    return Inflector.instance().class_name(table_name)


def register_rules(category, rules):
    '''Register custom rules on the shared instance, see
    :meth:`Inflector.register_rules`.'''
    Inflector.instance().register_rules(category, rules)
