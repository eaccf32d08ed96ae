"""Round-robin pairing generation for the league slot scheduler."""

from jbsg.models import League, Pair, Round, RoundPolicy

BYE = "__BYE__"


def generate_pairings(league: League,
                      policy: RoundPolicy | None = None) -> list[Round]:
    """Generate a league's season of rounds using the circle method.

    The team list order is the seed order: position 0 is the anchor and
    never moves. An odd team count gets a bye placeholder appended, and any
    pairing against it becomes a bye for the other team.

    Round numbers are 0-based; round r is played in season week r. The
    number of rounds comes from the policy table, not from the team count
    alone, so a league can cycle through the rotation more than once.
    """
    if policy is None:
        policy = RoundPolicy()

    order = list(league.teams)
    if not order:
        return []

    if len(order) % 2 == 1:
        order.append(BYE)
    n = len(order)

    rounds = []
    for r in range(policy.total_rounds(league.name, n)):
        pairs = []
        bye_teams = []
        for i in range(n // 2):
            home = order[i]
            away = order[n - 1 - i]
            if home == BYE:
                bye_teams.append(away)
            elif away == BYE:
                bye_teams.append(home)
            else:
                pairs.append(Pair(home, away, league.name, r))

        rounds.append(Round(number=r, pairs=pairs, bye_teams=bye_teams))

        # Rotate: keep position 0 fixed, move the last team to position 1
        order = [order[0]] + [order[-1]] + order[1:-1]

    return rounds


def verify_round_robin(rounds: list[Round], teams: list[str],
                       expected_meetings: int | None = None) -> dict:
    """Verify a league's rounds are valid and balanced.

    With ``expected_meetings`` every pair must meet exactly that often;
    without it, meeting counts may differ by at most one across pairs.

    Returns dict with:
    - valid: bool
    - errors: list of error strings
    - matchup_counts: dict of (team_a, team_b) -> count
    - games_per_team: dict of team -> game count
    """
    errors = []
    matchup_counts: dict[tuple[str, str], int] = {}
    games_per_team: dict[str, int] = {t: 0 for t in teams}

    for rnd in rounds:
        teams_in_round = set()
        for p in rnd.pairs:
            if p.home == p.away:
                errors.append(f"Round {rnd.number}: {p.home} plays itself")
            for t in (p.home, p.away):
                if t in teams_in_round:
                    errors.append(f"Round {rnd.number}: {t} appears twice")
                if t not in games_per_team:
                    errors.append(f"Round {rnd.number}: unknown team {t}")
                teams_in_round.add(t)

            key = tuple(sorted([p.home, p.away]))
            matchup_counts[key] = matchup_counts.get(key, 0) + 1
            games_per_team[p.home] = games_per_team.get(p.home, 0) + 1
            games_per_team[p.away] = games_per_team.get(p.away, 0) + 1

    counts = []
    for i, t1 in enumerate(teams):
        for t2 in teams[i + 1:]:
            key = tuple(sorted([t1, t2]))
            count = matchup_counts.get(key, 0)
            counts.append(count)
            if expected_meetings is not None and count != expected_meetings:
                errors.append(
                    f"{t1} vs {t2}: played {count} times "
                    f"(expected {expected_meetings})"
                )

    if expected_meetings is None and counts and max(counts) - min(counts) > 1:
        errors.append(
            f"Meeting counts range {min(counts)}-{max(counts)} (spread > 1)"
        )

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "matchup_counts": matchup_counts,
        "games_per_team": games_per_team,
    }
