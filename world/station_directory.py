# Copyright 2023 Andrew Holliday
# 
# This file is part of the Transit Routing project.
#
# Transit Routing is free software: you can redistribute it and/or modify it
# under the terms of the GNU General Public License as published by the Free 
# Software Foundation, either version 3 of the License, or (at your option) any 
# later version.
# 
# Transit Routing is distributed in the hope that it will be useful, but 
# WITHOUT ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or 
# FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more 
# details.
#
# You should have received a copy of the GNU General Public License along with 
# Transit Routing. If not, see <https://www.gnu.org/licenses/>.

"""A name-ordered directory of stations, stored as an unbalanced binary search
tree.

Names are compared case-insensitively but are displayed with their original
case.  The tree is never rebalanced, so a sorted insertion order degrades it
to a linked list; this is fine for the hundred-odd stations of a suburban 
network, but the recursive traversals below would need to become iterative 
(or the tree replaced with a balanced map) for much larger directories.
"""

import logging as log


MAX_SUGGESTIONS = 10


class _DirectoryNode:
    __slots__ = ('name', 'key', 'station_id', 'left', 'right')

    def __init__(self, name, station_id):
        self.name = name
        self.key = _name_key(name)
        self.station_id = station_id
        self.left = None
        self.right = None


class StationDirectory:
    def __init__(self):
        self._root = None
        self._count = 0

    def __len__(self):
        return self._count

    def add(self, name, station_id):
        """Inserts a station name.  If the name (ignoring case) is already in
        the directory nothing is inserted and False is returned; deciding 
        what a repeated name means is up to the caller."""
        name = name.strip()
        self._root, inserted = self._insert(self._root, name, station_id)
        if inserted:
            self._count += 1
        else:
            log.debug(f"station {name} is already in the directory")
        return inserted

    def _insert(self, node, name, station_id):
        if node is None:
            return _DirectoryNode(name, station_id), True
        key = _name_key(name)
        if key < node.key:
            node.left, inserted = self._insert(node.left, name, station_id)
        elif key > node.key:
            node.right, inserted = self._insert(node.right, name, station_id)
        else:
            inserted = False
        return node, inserted

    def lookup(self, name):
        """Returns the id of the named station, or None if there is no 
        station by that name."""
        node = self._search(self._root, _name_key(name))
        if node is None:
            return None
        return node.station_id

    def _search(self, node, key):
        if node is None or node.key == key:
            return node
        if key < node.key:
            return self._search(node.left, key)
        return self._search(node.right, key)

    def __contains__(self, name):
        return self.lookup(name) is not None

    def list(self):
        """All (name, id) pairs in case-insensitive alphabetical order."""
        entries = []
        self._inorder(self._root, entries)
        return entries

    def _inorder(self, node, entries):
        if node is None:
            return
        self._inorder(node.left, entries)
        entries.append((node.name, node.station_id))
        self._inorder(node.right, entries)

    def prefix_matches(self, prefix, limit=MAX_SUGGESTIONS):
        """Up to limit (name, id) pairs whose names start with prefix, 
        ignoring case, in alphabetical order."""
        matches = []
        self._collect_matching(self._root, _name_key(prefix), 
                               matches, limit)
        return matches

    def _collect_matching(self, node, prefix, matches, limit):
        if node is None or len(matches) >= limit:
            return
        # everything in the left subtree sorts before this node, so it can
        # only hold matches if this node's key is at or past the prefix
        if node.key >= prefix:
            self._collect_matching(node.left, prefix, matches, limit)
        if len(matches) < limit and node.key.startswith(prefix):
            matches.append((node.name, node.station_id))
        if len(matches) < limit and \
           (node.key < prefix or node.key.startswith(prefix)):
            self._collect_matching(node.right, prefix, matches, limit)


def _name_key(name):
    # surrounding whitespace and case don't distinguish station names
    return name.strip().casefold()
