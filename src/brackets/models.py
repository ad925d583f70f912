BRACKET_TYPES = ('winners', 'losers')


def _pick(data, *keys, default=None):
    """Return the first key present in data (snake_case or camelCase)."""
    for key in keys:
        if key in data:
            return data[key]
    return default


class Match:
    def __init__(self, id, round, match_number=0, group_id=None, bracket_type=None,
                 registration1_id=None, registration2_id=None, played=False,
                 winner_id=None, winner_to=None, loser_to=None, is_third_place=False):
        self.id = id
        self.round = round
        self.match_number = match_number
        self.group_id = group_id
        self.bracket_type = bracket_type
        self.registration1_id = registration1_id
        self.registration2_id = registration2_id
        self.played = played
        self.winner_id = winner_id
        self.winner_to = winner_to  # Placement tag, e.g. 'first-place'
        self.loser_to = loser_to
        self.is_third_place = is_third_place

    @classmethod
    def from_dict(cls, data):
        """Build a Match from a plain mapping.

        Accepts the snake_case keys used here and the camelCase keys of the
        events API. Raises ValueError when the id or round is missing.
        """
        match_id = _pick(data, 'id')
        if match_id is None:
            raise ValueError('Match id is required')
        round_num = _pick(data, 'round')
        if round_num is None:
            raise ValueError(f'Match {match_id} has no round')
        if isinstance(round_num, bool) or (isinstance(round_num, float) and not round_num.is_integer()):
            raise ValueError(f'Match {match_id} has invalid round: {round_num!r}')
        try:
            round_num = int(round_num)
        except (TypeError, ValueError):
            raise ValueError(f'Match {match_id} has invalid round: {round_num!r}')

        return cls(
            id=match_id,
            round=round_num,
            match_number=_pick(data, 'match_number', 'matchNumber', default=0) or 0,
            group_id=_pick(data, 'group_id', 'groupId'),
            bracket_type=_pick(data, 'bracket_type', 'bracketType'),
            registration1_id=_pick(data, 'registration1_id', 'registration1Id'),
            registration2_id=_pick(data, 'registration2_id', 'registration2Id'),
            played=bool(_pick(data, 'played', default=False)),
            winner_id=_pick(data, 'winner_id', 'winnerId'),
            winner_to=_pick(data, 'winner_to', 'winnerTo', 'winnerToPlacement'),
            loser_to=_pick(data, 'loser_to', 'loserTo', 'loserToPlacement'),
            is_third_place=bool(_pick(data, 'is_third_place', 'isThirdPlace', default=False)),
        )

    def to_dict(self):
        return {
            'id': self.id,
            'round': self.round,
            'match_number': self.match_number,
            'group_id': self.group_id,
            'bracket_type': self.bracket_type,
            'registration1_id': self.registration1_id,
            'registration2_id': self.registration2_id,
            'played': self.played,
            'winner_id': self.winner_id,
            'winner_to': self.winner_to,
            'loser_to': self.loser_to,
            'is_third_place': self.is_third_place,
        }

    def __repr__(self):
        return (f"Match(id={self.id}, round={self.round}, match_number={self.match_number}, "
                f"group_id={self.group_id}, bracket_type={self.bracket_type})")


class Group:
    def __init__(self, id, name, completed=False):
        self.id = id
        self.name = name
        self.completed = completed

    @classmethod
    def from_dict(cls, data):
        group_id = _pick(data, 'id')
        if group_id is None:
            raise ValueError('Group id is required')
        return cls(
            id=group_id,
            name=str(_pick(data, 'name', default='')),
            completed=bool(_pick(data, 'completed', default=False)),
        )

    def to_dict(self):
        return {'id': self.id, 'name': self.name, 'completed': self.completed}

    def __repr__(self):
        return f"Group(id={self.id}, name={self.name}, completed={self.completed})"


class Registration:
    def __init__(self, id, group_id=None, player_ids=None):
        self.id = id
        self.group_id = group_id
        self.player_ids = player_ids if player_ids else []

    @classmethod
    def from_dict(cls, data):
        registration_id = _pick(data, 'id')
        if registration_id is None:
            raise ValueError('Registration id is required')
        player_ids = _pick(data, 'player_ids', 'playerIds')
        if player_ids is None:
            player_ids = [p for p in (_pick(data, 'player1_id', 'player1Id'),
                                      _pick(data, 'player2_id', 'player2Id')) if p]
        return cls(
            id=registration_id,
            group_id=_pick(data, 'group_id', 'groupId'),
            player_ids=list(player_ids),
        )

    def __repr__(self):
        return f"Registration(id={self.id}, group_id={self.group_id}, player_ids={self.player_ids})"
