"""
vector path descriptors. The layout engines describe shapes as lists of path commands which the drawing
module (or any other renderer) converts to svg path data
"""


def format_number(value, precision=3):
    """
    Example:
        >>> format_number(2.50000)
        '2.5'
        >>> format_number(-0.0001)
        '0'
    """
    text = '{:.{}f}'.format(value, precision).rstrip('0').rstrip('.')
    if text in ['-0', '']:
        return '0'
    return text


class PathDescriptor:
    """
    ordered list of path commands. Each command is a tuple of the command letter followed by its
    arguments, using the svg path command letters (absolute coordinates only)
    """

    def __init__(self, commands=None):
        self.commands = list(commands or [])

    def move_to(self, x, y):
        self.commands.append(('M', x, y))
        return self

    def line_to(self, x, y):
        self.commands.append(('L', x, y))
        return self

    def horizontal_to(self, x):
        self.commands.append(('H', x))
        return self

    def vertical_to(self, y):
        self.commands.append(('V', y))
        return self

    def arc_to(self, radius, large_arc, sweep, x, y):
        self.commands.append(('A', radius, radius, 0, int(bool(large_arc)), int(bool(sweep)), x, y))
        return self

    def close(self):
        self.commands.append(('Z', ))
        return self

    def is_empty(self):
        return not self.commands

    def __len__(self):
        return len(self.commands)

    def __iter__(self):
        return iter(self.commands)

    def points(self):
        """
        the explicit end points of each command. Horizontal and vertical moves are resolved against the previous point
        """
        result = []
        x, y = 0, 0
        for command in self.commands:
            letter = command[0]
            if letter in 'ML':
                x, y = command[1], command[2]
            elif letter == 'H':
                x = command[1]
            elif letter == 'V':
                y = command[1]
            elif letter == 'A':
                x, y = command[6], command[7]
            else:
                continue
            result.append((x, y))
        return result

    def translate(self, dx=0, dy=0):
        """
        returns a new descriptor with every point moved by the offset
        """
        commands = []
        for command in self.commands:
            letter = command[0]
            if letter in 'ML':
                commands.append((letter, command[1] + dx, command[2] + dy))
            elif letter == 'H':
                commands.append((letter, command[1] + dx))
            elif letter == 'V':
                commands.append((letter, command[1] + dy))
            elif letter == 'A':
                commands.append(command[:6] + (command[6] + dx, command[7] + dy))
            else:
                commands.append(command)
        return self.__class__(commands)

    def to_svg(self):
        parts = []
        for command in self.commands:
            letter = command[0]
            args = command[1:]
            if letter == 'Z':
                parts.append('Z')
            elif letter in 'ML':
                parts.append('{} {},{}'.format(letter, format_number(args[0]), format_number(args[1])))
            elif letter == 'A':
                parts.append('A {} {} {} {} {} {},{}'.format(
                    format_number(args[0]), format_number(args[1]), args[2], args[3], args[4],
                    format_number(args[5]), format_number(args[6])))
            else:
                parts.append('{} {}'.format(letter, format_number(args[0])))
        return ' '.join(parts)

    def __str__(self):
        return self.to_svg()

    def __repr__(self):
        return '{}({})'.format(self.__class__.__name__, repr(self.to_svg()))


class ArcDescriptor(PathDescriptor):
    """
    path descriptor for an arc band of the circular view, keeping the angular geometry it was built from

    Attributes:
        start_angle (float): the angle of the start position in radians
        end_angle (float): the angle the band ends at (start_angle + angular_span)
        angular_span (float): the signed sweep of the band in radians
        inner_radius (float): radius of the inner edge
        outer_radius (float): radius of the outer edge
    """

    def __init__(self, commands=None, start_angle=0, angular_span=0, inner_radius=0, outer_radius=0, has_arrow=False):
        PathDescriptor.__init__(self, commands)
        self.start_angle = start_angle
        self.angular_span = angular_span
        self.inner_radius = inner_radius
        self.outer_radius = outer_radius
        self.has_arrow = has_arrow

    @property
    def end_angle(self):
        return self.start_angle + self.angular_span

    def translate(self, dx=0, dy=0):
        result = PathDescriptor.translate(self, dx, dy)
        return ArcDescriptor(
            result.commands, self.start_angle, self.angular_span, self.inner_radius, self.outer_radius, self.has_arrow)
