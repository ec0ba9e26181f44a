import os

from traitlets import Enum, Bool, HasTraits
from traitlets.config.loader import JSONFileConfigLoader, ConfigFileNotFound


CONFIG_BASENAME = 'updatebuilder_config'


class UpdateBuilderConfigurable(HasTraits):

    def configured_traits(self, cls):
        traits = cls.class_own_traits(config=True)
        c = {}
        for name, _ in traits.items():
            c[name] = getattr(self, name)
        return c


_config_cache = {}
def config_instance(cls):
    if cls in _config_cache:
        return _config_cache[cls]
    instance = _config_cache[cls] = cls()
    return instance


def _load_config_files(basefilename, path=None):
    """Load config files (json) by filename and path.

    yield each config object in turn.
    """

    if not isinstance(path, list):
        path = [path]
    for path in path[::-1]:
        # path list is in descending priority order, so load files backwards:
        loader = JSONFileConfigLoader(basefilename+'.json', path=path)
        config = None
        try:
            config = loader.load_config()
        except ConfigFileNotFound:
            pass
        if config:
            yield config


def recursive_update(target, new, include_none):
    """Recursively update one dictionary using another.

    None values will delete their keys.
    """
    for k, v in new.items():
        if isinstance(v, dict):
            if k not in target:
                target[k] = {}
            recursive_update(target[k], v, include_none)
            if not include_none and not target[k]:
                # Prune empty subdicts
                del target[k]

        elif not include_none and v is None:
            target.pop(k, None)

        else:
            target[k] = v


def config_path():
    "Directories searched for config files, highest priority first."
    path = [os.getcwd()]
    user_dir = os.environ.get('UPDATEBUILDER_CONFIG_DIR')
    if user_dir:
        path.append(user_dir)
    return path


def build_config(entrypoint, include_none=False):
    if entrypoint not in entrypoint_configurables:
        raise ValueError('Config for entrypoint name %r is not defined! Accepted values are %r.' % (
            entrypoint, list(entrypoint_configurables.keys())
        ))

    # Get config from disk:
    disk_config = {}
    for c in _load_config_files(CONFIG_BASENAME, path=config_path()):
        recursive_update(disk_config, c, include_none)

    config = {}
    configurable = entrypoint_configurables[entrypoint]
    for c in reversed(configurable.mro()):
        if issubclass(c, UpdateBuilderConfigurable):
            recursive_update(config, config_instance(c).configured_traits(c), include_none)
            if (c.__name__ in disk_config):
                recursive_update(config, disk_config[c.__name__], include_none)

    return config


def get_defaults_for_argparse(entrypoint):
    return build_config(entrypoint)


class Global(UpdateBuilderConfigurable):

    log_level = Enum(
        ('DEBUG', 'INFO', 'WARN', 'ERROR', 'CRITICAL'),
        'INFO',
        help="Set the log level by name.",
    ).tag(config=True)


class BuilderOptions(UpdateBuilderConfigurable):
    """Options accepted by the UpdateBuilder factories."""

    use_version_key = Bool(
        False,
        help="reserve a version key for optimistic concurrency control.",
    ).tag(config=True)

    @classmethod
    def from_kwargs(cls, options):
        unknown = sorted(set(options) - set(cls.class_trait_names(config=True)))
        if unknown:
            raise TypeError('Unrecognized builder option(s): %s' % ', '.join(unknown))
        return cls(**options)


class _Output(UpdateBuilderConfigurable):

    color = Bool(
        True,
        help="use colors when pretty-printing to a terminal.",
    ).tag(config=True)


class Compile(Global, BuilderOptions, _Output):

    json = Bool(
        False,
        help="print the compiled update as JSON instead of pretty-printing it.",
    ).tag(config=True)


class Apply(Global):
    pass


entrypoint_configurables = {
    'compile': Compile,
    'apply': Apply,
}
