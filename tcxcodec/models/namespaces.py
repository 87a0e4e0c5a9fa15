# XML namespace definitions used when reading and writing TCX files.

TCX_NS = 'http://www.garmin.com/xmlschemas/TrainingCenterDatabase/v2'
ACTIVITY_EXTENSION_NS = 'http://www.garmin.com/xmlschemas/ActivityExtension/v2'
XSI_NS = 'http://www.w3.org/2001/XMLSchema-instance'

TCX_SCHEMALOCATION = 'http://www.garmin.com/xmlschemas/TrainingCenterDatabase/v2 '\
                     'http://www.garmin.com/xmlschemas/TrainingCenterDatabasev2.xsd'


def qname(namespace, name):
    """Clark-notation tag, ``{namespace}name``."""
    if namespace is None:
        return name
    return '{%s}%s' % (namespace, name)


def split_qname(tag):
    """Split a Clark-notation tag into ``(namespace, local_name)``."""
    if tag.startswith('{'):
        namespace, _, local = tag[1:].partition('}')
        return namespace, local
    return None, tag
