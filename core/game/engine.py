"""Blackjack game engine with state machine."""

from decimal import Decimal
from random import Random
from typing import Callable

from transitions import Machine

from core.cards import Card, Deck
from core.errors import DeckExhausted
from core.hand import Hand
from core.rules import RuleSet
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.render import render_game
from core.game.state import GameState


class BlackjackGame:
    """
    One player's round of blackjack against the dealer.

    The game is a state machine: a wager starts the round, the player hits
    or stays, the dealer then plays automatically and the round ends in a
    terminal state carrying the payout. Every public action is a no-op
    outside the state it belongs to.
    """

    # State machine states
    STATES = [s.name.lower() for s in GameState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "start_round", "source": "place_bet", "dest": "player_turn"},
        {"trigger": "natural_push", "source": "player_turn", "dest": "push"},
        {"trigger": "natural_blackjack", "source": "player_turn", "dest": "blackjack"},
        {"trigger": "bust", "source": "player_turn", "dest": "busted"},
        {"trigger": "end_turn", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "player_wins", "source": "dealer_turn", "dest": "won"},
        {"trigger": "tie", "source": "dealer_turn", "dest": "push"},
        {"trigger": "dealer_wins", "source": "dealer_turn", "dest": "lost"},
        {"trigger": "void", "source": ["player_turn", "dealer_turn"], "dest": "failed"},
    ]

    def __init__(
        self,
        player_id: str,
        rules: RuleSet | None = None,
        deck: Deck | None = None,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize a new game waiting for a bet.

        Args:
            player_id: Identifier of the player owning the game
            rules: Table rules (uses defaults if not provided)
            deck: Pre-built deck, dealt as is (a fresh shuffled one otherwise)
            rng: Random number generator for reproducible shuffles
        """
        self.player_id = player_id
        self.rules = rules or RuleSet()
        if deck is None:
            deck = Deck(num_decks=self.rules.num_decks, rng=rng)
            deck.shuffle()
        self.deck = deck

        self.wager = 0
        self.payout = 0
        self.player_hand = Hand()
        self.dealer_hand = Hand()
        self.events = EventEmitter()

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="place_bet",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> GameState:
        """Get current game state as enum."""
        return GameState[self._machine_state.upper()]  # type: ignore

    @property
    def is_over(self) -> bool:
        """Check if the round has reached a terminal state."""
        return self.state.is_terminal

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def bet(self, amount: int) -> bool:
        """
        Place the wager and deal the opening cards.

        Args:
            amount: Wager, a non-negative integer

        Returns:
            True if the bet was accepted, False if the game is past betting

        Raises:
            DeckExhausted: The deck ran out while dealing; the game is void
        """
        if self.state != GameState.PLACE_BET:
            return False
        if amount < 0:
            raise ValueError("Bet must not be negative")

        self.wager = amount
        self.events.emit_new(EventType.BET_PLACED, player=self.player_id, amount=amount)
        self.start_round()

        # Deal: player, dealer, player, dealer
        self._deal_card_to_hand(self.player_hand)
        self._deal_card_to_hand(self.dealer_hand)
        self._deal_card_to_hand(self.player_hand)
        self._deal_card_to_hand(self.dealer_hand, face_up=False)

        if self.player_hand.is_blackjack:
            if self.dealer_hand.is_blackjack:
                self.payout = self.wager
                self.events.emit_new(EventType.PUSH, payout=self.payout)
                self.natural_push()
            else:
                bonus = Decimal(self.wager) * Decimal(str(self.rules.blackjack_payout))
                self.payout = self.wager + int(bonus)
                self.events.emit_new(EventType.PLAYER_BLACKJACK, payout=self.payout)
                self.natural_blackjack()
            self._round_ended()

        return True

    def hit(self) -> bool:
        """Player takes another card."""
        if self.state != GameState.PLAYER_TURN:
            return False

        self._deal_card_to_hand(self.player_hand)
        self.events.emit_new(EventType.PLAYER_HIT, hand_value=self.player_hand.value)

        if self.player_hand.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_value=self.player_hand.value)
            self.bust()
            self._round_ended()

        return True

    def stay(self) -> bool:
        """Player keeps the hand; the dealer plays it out and the round resolves."""
        if self.state != GameState.PLAYER_TURN:
            return False

        self.events.emit_new(EventType.PLAYER_STAY, hand_value=self.player_hand.value)
        self.end_turn()
        self._play_dealer()
        self._resolve_round()
        return True

    def render(self) -> str:
        """Human-readable description of the current state."""
        return render_game(self)

    def _deal_card_to_hand(self, hand: Hand, face_up: bool = True) -> Card:
        """Deal a card to a hand, voiding the game if the deck is empty."""
        try:
            card = self.deck.deal_card()
        except DeckExhausted:
            self.payout = self.wager
            self.events.emit_new(
                EventType.DECK_EXHAUSTED,
                player=self.player_id,
                total_cards=self.deck.total_cards,
            )
            self.void()
            raise

        hand.add_card(card)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card) if face_up else "??",
            hand="dealer" if hand is self.dealer_hand else "player",
        )
        return card

    def _play_dealer(self) -> None:
        """Dealer draws until reaching the standing total."""
        while self.dealer_hand.value < self.rules.dealer_stands_on:
            self._deal_card_to_hand(self.dealer_hand)
            self.events.emit_new(EventType.DEALER_HITS, hand_value=self.dealer_hand.value)

        if self.dealer_hand.is_busted:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=self.dealer_hand.value)
        else:
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=self.dealer_hand.value)

    def _resolve_round(self) -> None:
        """Compare the final hands and settle the payout."""
        player_value = self.player_hand.value
        dealer_value = self.dealer_hand.value

        # A busted dealer loses to any standing hand, whatever the totals
        if self.dealer_hand.is_busted or player_value > dealer_value:
            self.payout = self.wager * 2
            self.events.emit_new(EventType.PLAYER_WINS, payout=self.payout)
            self.player_wins()
        elif player_value == dealer_value:
            self.payout = self.wager
            self.events.emit_new(EventType.PUSH, payout=self.payout)
            self.tie()
        else:
            self.payout = 0
            self.events.emit_new(EventType.PLAYER_LOSES, wager=self.wager)
            self.dealer_wins()

        self._round_ended()

    def _round_ended(self) -> None:
        self.events.emit_new(
            EventType.ROUND_ENDED,
            player=self.player_id,
            state=self.state.name,
            wager=self.wager,
            payout=self.payout,
        )

    def __repr__(self) -> str:
        return (
            f"BlackjackGame(player_id={self.player_id!r}, state={self.state.name}, "
            f"wager={self.wager}, payout={self.payout})"
        )
